from datetime import timedelta
from pathlib import Path

import jwt
import pytest

from massaction.auth.auth_service import (
    ADMIN_SCOPE,
    AdminCredential,
    AuthService,
    InsufficientScopeError,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    hash_password,
)

pytestmark = pytest.mark.unit


def build_service(ttl: timedelta = timedelta(hours=1)) -> AuthService:
    credential = AdminCredential(username="admin", password_hash=hash_password("secret"))
    return AuthService(
        credentials={"admin": credential},
        signing_key="test-key",
        token_ttl=ttl,
    )


def test_authenticate_returns_token_for_valid_credentials() -> None:
    service = build_service()

    token, expires_in = service.authenticate("admin", "secret")

    assert expires_in == 3600
    payload = jwt.decode(token, "test-key", algorithms=["HS256"])
    assert payload["sub"] == "admin"
    assert payload["scope"] == ADMIN_SCOPE


def test_authenticate_raises_for_invalid_password() -> None:
    service = build_service()

    with pytest.raises(InvalidCredentialsError):
        service.authenticate("admin", "wrong")
    with pytest.raises(InvalidCredentialsError):
        service.authenticate("nobody", "secret")


def test_disabled_admin_cannot_log_in() -> None:
    service = build_service()
    service.credentials["admin"].disabled = True

    with pytest.raises(InvalidCredentialsError):
        service.authenticate("admin", "secret")


def test_validate_token_checks_scope_and_expiry() -> None:
    service = build_service()
    token, _ = service.authenticate("admin", "secret")

    assert service.validate_token(token, required_scope=ADMIN_SCOPE)["sub"] == "admin"
    with pytest.raises(InsufficientScopeError):
        service.validate_token(token, required_scope="other:scope")
    with pytest.raises(InvalidTokenError):
        service.validate_token("not-a-token")

    expired, _ = build_service(ttl=timedelta(seconds=-10)).authenticate("admin", "secret")
    with pytest.raises(TokenExpiredError):
        service.validate_token(expired)


def test_from_file_loads_admins() -> None:
    path = Path(__file__).resolve().parents[2] / "data" / "runtime_credentials.json"

    service = AuthService.from_file(path, signing_key="key", token_ttl_hours=2)

    assert set(service.credentials) == {"admin"}
    assert service.token_ttl == timedelta(hours=2)


def test_from_file_requires_signing_key(tmp_path: Path) -> None:
    with pytest.raises(RuntimeError):
        AuthService.from_file(tmp_path / "missing.json", signing_key="", token_ttl_hours=1)
