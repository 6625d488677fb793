"""Login and session introspection for configuration administrators."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from .auth_dependencies import AdminPrincipal, get_auth_service, require_admin_user
from .auth_service import AuthService, InvalidCredentialsError

router = APIRouter(prefix="/api/auth", tags=["auth"])


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class AdminResponse(BaseModel):
    username: str
    scope: str


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, service: AuthService = Depends(get_auth_service)) -> LoginResponse:
    try:
        token, expires_in = service.authenticate(payload.username, payload.password)
    except InvalidCredentialsError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"status": "error", "failure_reason": "invalid_credentials"},
        ) from exc
    return LoginResponse(access_token=token, expires_in=expires_in)


@router.get("/me", response_model=AdminResponse)
def current_admin(principal: AdminPrincipal = Depends(require_admin_user)) -> AdminResponse:
    return AdminResponse(username=principal.username, scope=principal.scope)
