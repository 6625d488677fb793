"""Admin authentication and JWT issuance."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import jwt
import structlog
from jwt import ExpiredSignatureError
from jwt import InvalidTokenError as PyJWTInvalidTokenError

logger = structlog.get_logger(__name__)

ADMIN_SCOPE = "massaction:admin"


def hash_password(value: str) -> str:
    """Return hex sha256 hash for the provided password."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


@dataclass(slots=True)
class AdminCredential:
    username: str
    password_hash: str
    scope: str = ADMIN_SCOPE
    disabled: bool = False

    def verify(self, password: str) -> bool:
        return not self.disabled and self.password_hash == hash_password(password)


class AuthError(Exception):
    """Base class for auth failures."""


class InvalidCredentialsError(AuthError):
    """Raised when username/password mismatch."""


class InvalidTokenError(AuthError):
    """Raised when token cannot be decoded."""


class TokenExpiredError(AuthError):
    """Raised when token is expired."""


class InsufficientScopeError(AuthError):
    """Raised when token scope does not match requirement."""


@dataclass(slots=True)
class AuthService:
    """Authenticate configured administrators and issue JWT tokens."""

    credentials: dict[str, AdminCredential]
    signing_key: str
    token_ttl: timedelta

    @classmethod
    def from_file(cls, path: Path, signing_key: str, token_ttl_hours: int) -> "AuthService":
        if not signing_key:
            raise RuntimeError("JWT_SIGNING_KEY is not configured")
        return cls(
            credentials=cls._load_credentials(path),
            signing_key=signing_key,
            token_ttl=timedelta(hours=token_ttl_hours),
        )

    @staticmethod
    def _load_credentials(path: Path) -> dict[str, AdminCredential]:
        if not path.exists():
            raise FileNotFoundError(f"Admin credentials file not found: {path}")
        raw = json.loads(path.read_text(encoding="utf-8"))
        admins = raw.get("admins")
        if not isinstance(admins, list):
            raise ValueError("Invalid admin credentials structure: 'admins' must be an array")
        records: dict[str, AdminCredential] = {}
        for entry in admins:
            username = entry.get("username")
            password_hash = entry.get("password_hash")
            if not username or not password_hash:
                raise ValueError("Each admin entry must contain username and password_hash")
            records[username] = AdminCredential(
                username=username,
                password_hash=password_hash,
                scope=entry.get("scope", ADMIN_SCOPE),
                disabled=bool(entry.get("disabled", False)),
            )
        if not records:
            raise ValueError("No admin credentials configured")
        return records

    def authenticate(self, username: str, password: str) -> tuple[str, int]:
        """Validate credentials and return JWT token + ttl seconds."""
        credential = self.credentials.get(username)
        if credential is None or not credential.verify(password):
            logger.warning("auth.login.failure", username=username)
            raise InvalidCredentialsError("Invalid username or password")

        issued_at = datetime.now(tz=timezone.utc)
        payload: dict[str, Any] = {
            "sub": username,
            "scope": credential.scope,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.token_ttl).timestamp()),
        }
        token = jwt.encode(payload, self.signing_key, algorithm="HS256")
        expires_in = int(self.token_ttl.total_seconds())
        logger.info("auth.login.success", username=username, expires_in=expires_in)
        return token, expires_in

    def validate_token(self, token: str, required_scope: str | None = None) -> dict[str, Any]:
        """Decode JWT and ensure scope matches requirement."""
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self.signing_key,
                algorithms=["HS256"],
                options={"require": ["exp", "iat", "sub", "scope"]},
            )
        except ExpiredSignatureError as exc:
            raise TokenExpiredError("Token expired") from exc
        except PyJWTInvalidTokenError as exc:
            raise InvalidTokenError("Invalid token") from exc

        if required_scope and payload.get("scope") != required_scope:
            raise InsufficientScopeError("Insufficient scope")
        return payload


__all__ = [
    "ADMIN_SCOPE",
    "AdminCredential",
    "AuthError",
    "AuthService",
    "InsufficientScopeError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "TokenExpiredError",
    "hash_password",
]
