"""Admin routes for loading and saving mass action configurations."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ..auth.auth_dependencies import require_admin_user
from .configurations_errors import ConfigurationSaveError, InvalidPayloadError
from .configurations_schemas import (
    ConfigurationResponse,
    SaveConfigurationRequest,
    SaveConfigurationResponse,
)
from .configurations_service import ConfigurationService

router = APIRouter(
    prefix="/api/configurations",
    tags=["configurations"],
    dependencies=[Depends(require_admin_user)],
)


def get_configuration_service(request: Request) -> ConfigurationService:
    try:
        return request.app.state.configuration_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("ConfigurationService is not configured") from exc


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"status": "error", "failure_reason": "configuration_not_found"},
    )


@router.post("", response_model=SaveConfigurationResponse)
def save_configuration(
    payload: SaveConfigurationRequest,
    service: ConfigurationService = Depends(get_configuration_service),
) -> SaveConfigurationResponse:
    try:
        result = service.save_configuration(payload.configuration, payload.mappings)
    except InvalidPayloadError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"status": "error", "failure_reason": "invalid_payload", "details": str(exc)},
        ) from exc
    except ConfigurationSaveError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"status": "error", "failure_reason": "save_failed", "details": str(exc)},
        ) from exc
    return SaveConfigurationResponse(success=result.success, record_id=result.record_id)


@router.get("/{configuration_id}", response_model=ConfigurationResponse)
def load_configuration(
    configuration_id: str,
    service: ConfigurationService = Depends(get_configuration_service),
) -> ConfigurationResponse:
    payload = service.load_configuration(configuration_id)
    if payload is None:
        raise _not_found()
    return ConfigurationResponse(**payload)


@router.get("/{configuration_id}/mappings", response_model=dict[str, str])
def load_field_mappings(
    configuration_id: str,
    service: ConfigurationService = Depends(get_configuration_service),
) -> dict[str, str]:
    return service.load_field_mappings(configuration_id)
