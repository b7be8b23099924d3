from datetime import timedelta, timezone, datetime

import jwt
import pytest

from src.talent_cms.auth.auth_service import (
    AdminCredential,
    AuthService,
    InvalidCredentialsError,
    LoginThrottledError,
)
from src.talent_cms.auth.auth_tokens import (
    InsufficientScopeError,
    InvalidTokenError,
    TokenCodec,
    TokenExpiredError,
)
from src.talent_cms.security.passwords import hash_password


def build_service() -> AuthService:
    credential = AdminCredential(
        username="serg", password_hash=hash_password("secret", iterations=1_000)
    )
    return AuthService(
        credentials={"serg": credential},
        tokens=TokenCodec(signing_key="test-key", token_ttl=timedelta(hours=1)),
    )


def test_authenticate_returns_token_for_valid_credentials() -> None:
    service = build_service()

    token, expires_in = service.authenticate("serg", "secret")

    assert expires_in == 3600
    payload = jwt.decode(token, "test-key", algorithms=["HS256"])
    assert payload["sub"] == "serg"
    assert payload["scope"] == "admin"


def test_authenticate_raises_for_invalid_password() -> None:
    service = build_service()

    with pytest.raises(InvalidCredentialsError):
        service.authenticate("serg", "wrong")
    with pytest.raises(InvalidCredentialsError):
        service.authenticate("nobody", "secret")


def test_disabled_admin_cannot_log_in() -> None:
    service = build_service()
    service.credentials["serg"].disabled = True

    with pytest.raises(InvalidCredentialsError):
        service.authenticate("serg", "secret")


def test_authenticate_blocks_after_too_many_failures() -> None:
    service = build_service()

    for _ in range(service.max_failures):
        with pytest.raises(InvalidCredentialsError):
            service.authenticate("serg", "wrong")

    with pytest.raises(LoginThrottledError):
        service.authenticate("serg", "wrong")

    # simulate block expiry
    state = service._failed_logins["serg"]  # type: ignore[attr-defined]
    state.blocked_until = datetime.now(timezone.utc) - timedelta(seconds=1)

    token, _ = service.authenticate("serg", "secret")
    assert token


def test_token_codec_enforces_scope_and_expiry() -> None:
    codec = TokenCodec(signing_key="test-key", token_ttl=timedelta(hours=1))
    token = codec.issue("42", "user")

    assert codec.decode(token, required_scope="user")["sub"] == "42"
    with pytest.raises(InsufficientScopeError):
        codec.decode(token, required_scope="admin")
    with pytest.raises(InvalidTokenError):
        codec.decode(token + "x")

    stale = codec.issue("42", "user", issued_at=datetime.now(timezone.utc) - timedelta(hours=2))
    with pytest.raises(TokenExpiredError):
        codec.decode(stale)


def test_token_codec_requires_signing_key() -> None:
    with pytest.raises(RuntimeError):
        TokenCodec(signing_key="", token_ttl=timedelta(hours=1))


def test_from_file_loads_admins(tmp_path) -> None:
    path = tmp_path / "admins.json"
    path.write_text(
        '{"admins": [{"username": "root", "password_hash": "%s"}]}'
        % hash_password("pw", iterations=1_000),
        encoding="utf-8",
    )
    codec = TokenCodec(signing_key="test-key", token_ttl=timedelta(hours=1))

    service = AuthService.from_file(path, codec)

    assert service.profile("root") == {"username": "root", "scope": "admin"}
    with pytest.raises(FileNotFoundError):
        AuthService.from_file(tmp_path / "missing.json", codec)
