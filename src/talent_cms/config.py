"""Application configuration builder."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .db.db_init import init_db

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp")
VIDEO_EXTENSIONS = (".mp4", ".webm", ".mov", ".mkv")


@dataclass(slots=True)
class UploadLimits:
    image_extensions: Sequence[str]
    video_extensions: Sequence[str]
    avatar_limit_mb: int
    talent_limit_mb: int
    banner_limit_mb: int
    video_limit_mb: int
    chunk_size_bytes: int

    def extensions_for(self, media: str) -> Sequence[str]:
        if media == "video":
            return self.video_extensions
        return self.image_extensions

    def limit_bytes(self, limit_name: str) -> int:
        return int(getattr(self, limit_name)) * 1024 * 1024


@dataclass(slots=True)
class AppConfig:
    media_root: Path
    upload_limits: UploadLimits
    database_url: str
    engine: Engine
    session_factory: sessionmaker[Session]
    jwt_signing_key: str
    admin_credentials_path: Path
    admin_jwt_ttl_hours: int
    user_jwt_ttl_hours: int


def build_engine(database_url: str) -> Engine:
    """Create engine; SQLite connections are shared with the threadpool."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, future=True, connect_args=connect_args)


def load_upload_limits() -> UploadLimits:
    return UploadLimits(
        image_extensions=IMAGE_EXTENSIONS,
        video_extensions=VIDEO_EXTENSIONS,
        avatar_limit_mb=int(os.getenv("UPLOAD_AVATAR_LIMIT_MB", 2)),
        talent_limit_mb=int(os.getenv("UPLOAD_TALENT_LIMIT_MB", 10)),
        banner_limit_mb=int(os.getenv("UPLOAD_BANNER_LIMIT_MB", 10)),
        video_limit_mb=int(os.getenv("UPLOAD_VIDEO_LIMIT_MB", 100)),
        chunk_size_bytes=int(os.getenv("UPLOAD_CHUNK_SIZE_BYTES", 256 * 1024)),
    )


def load_config() -> AppConfig:
    """Load configuration from environment (SQLite by default)."""
    media_root = Path(os.getenv("MEDIA_ROOT", "uploads"))
    media_root.mkdir(parents=True, exist_ok=True)

    database_url = os.getenv("DATABASE_URL", "sqlite:///talent_cms.db")
    engine = build_engine(database_url)
    session_factory: sessionmaker[Session] = sessionmaker(bind=engine, expire_on_commit=False)

    init_db(engine, session_factory)

    return AppConfig(
        media_root=media_root,
        upload_limits=load_upload_limits(),
        database_url=database_url,
        engine=engine,
        session_factory=session_factory,
        jwt_signing_key=os.getenv("JWT_SIGNING_KEY", ""),
        admin_credentials_path=Path(
            os.getenv("ADMIN_CREDENTIALS_PATH", "secrets/admin_credentials.json")
        ),
        admin_jwt_ttl_hours=int(os.getenv("ADMIN_JWT_TTL_HOURS", 12)),
        user_jwt_ttl_hours=int(os.getenv("USER_JWT_TTL_HOURS", 168)),
    )
