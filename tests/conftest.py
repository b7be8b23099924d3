from __future__ import annotations

import json
import os
import tempfile
from dataclasses import replace
from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from src.talent_cms.security.passwords import hash_password

RUNTIME_DIR = Path(tempfile.mkdtemp(prefix="talent-cms-tests-"))
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin-secret"
TEST_CREDENTIALS = RUNTIME_DIR / "admin_credentials.json"
TEST_CREDENTIALS.write_text(
    json.dumps(
        {
            "admins": [
                {
                    "username": ADMIN_USERNAME,
                    "password_hash": hash_password(ADMIN_PASSWORD, iterations=1_000),
                    "scope": "admin",
                }
            ]
        }
    ),
    encoding="utf-8",
)

os.environ.setdefault("JWT_SIGNING_KEY", "test-signing-key")
os.environ.setdefault("ADMIN_CREDENTIALS_PATH", str(TEST_CREDENTIALS))
os.environ.setdefault("ADMIN_JWT_TTL_HOURS", "168")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("MEDIA_ROOT", str(RUNTIME_DIR / "uploads"))

from src.talent_cms.config import AppConfig, load_upload_limits  # noqa: E402
from src.talent_cms.db.db_init import init_db  # noqa: E402
from src.talent_cms.media.media_storage import MediaStore  # noqa: E402
from src.talent_cms.slots.slot_kinds import SlotKind  # noqa: E402
from src.talent_cms.slots.slot_replacement import SlotReplacer  # noqa: E402
from src.talent_cms.slots.slots_models import Upload  # noqa: E402
from src.talent_cms.slots.slots_repository import SlotStore  # noqa: E402


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite://",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker[Session]:
    factory: sessionmaker[Session] = sessionmaker(bind=engine, expire_on_commit=False)
    init_db(engine, factory)
    return factory


@pytest.fixture
def media_root(tmp_path: Path) -> Path:
    root = tmp_path / "uploads"
    root.mkdir()
    return root


@pytest.fixture
def media(media_root: Path) -> MediaStore:
    return MediaStore(media_root)


@pytest.fixture
def store(session_factory: sessionmaker[Session]) -> SlotStore:
    return SlotStore(session_factory)


@pytest.fixture
def replacer(store: SlotStore, media: MediaStore) -> SlotReplacer:
    return SlotReplacer(store=store, media=media)


@pytest.fixture
def stage_upload(media: MediaStore):
    """Write a file into a kind's directory the way the upload receiver would."""

    def _stage(kind: SlotKind, filename: str, content: bytes = b"data") -> Upload:
        path = media.ensure_directory(kind) / filename
        path.write_bytes(content)
        return Upload(
            temp_path=path,
            filename=filename,
            size_bytes=len(content),
            extension=path.suffix,
        )

    return _stage


@pytest.fixture
def app_config(
    engine: Engine, session_factory: sessionmaker[Session], media_root: Path
) -> AppConfig:
    return AppConfig(
        media_root=media_root,
        upload_limits=replace(load_upload_limits(), chunk_size_bytes=64 * 1024),
        database_url="sqlite://",
        engine=engine,
        session_factory=session_factory,
        jwt_signing_key="test-signing-key",
        admin_credentials_path=TEST_CREDENTIALS,
        admin_jwt_ttl_hours=1,
        user_jwt_ttl_hours=1,
    )


@pytest.fixture
def client(app_config: AppConfig) -> Iterator[TestClient]:
    from src.talent_cms.main import create_app

    app = create_app(app_config)
    app.state.user_service.password_iterations = 1_000
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(client: TestClient) -> dict[str, str]:
    response = client.post(
        "/api/admin/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['data']['token']}"}
