"""FastAPI dependencies guarding the admin routes."""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .auth_service import (
    ADMIN_SCOPE,
    AuthService,
    InsufficientScopeError,
    InvalidTokenError,
    TokenExpiredError,
)

logger = structlog.get_logger(__name__)

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True, slots=True)
class AdminPrincipal:
    """Administrator identified by a validated bearer token."""

    username: str
    scope: str


def _reject(reason: str, status_code: int = status.HTTP_401_UNAUTHORIZED) -> HTTPException:
    logger.info("auth.token.rejected", reason=reason)
    return HTTPException(
        status_code=status_code,
        detail={"status": "error", "failure_reason": reason},
    )


def get_auth_service(request: Request) -> AuthService:
    try:
        return request.app.state.auth_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("AuthService is not configured") from exc


def require_admin_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    service: AuthService = Depends(get_auth_service),
) -> AdminPrincipal:
    """Resolve the bearer token into an :class:`AdminPrincipal` or fail with 401/403."""
    if credentials is None:
        raise _reject("missing_token")

    try:
        claims = service.validate_token(credentials.credentials, required_scope=ADMIN_SCOPE)
    except TokenExpiredError as exc:
        raise _reject("token_expired") from exc
    except InvalidTokenError as exc:
        raise _reject("invalid_token") from exc
    except InsufficientScopeError as exc:
        raise _reject("insufficient_scope", status.HTTP_403_FORBIDDEN) from exc
    return AdminPrincipal(username=claims["sub"], scope=claims["scope"])


__all__ = ["AdminPrincipal", "get_auth_service", "require_admin_user"]
