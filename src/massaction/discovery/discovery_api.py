"""Admin routes for capability discovery pickers."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from ..auth.auth_dependencies import require_admin_user
from ..domain import Category
from .discovery_errors import DiscoveryError, UnknownEndpointError
from .discovery_schemas import (
    DiscoveredInputResponse,
    PicklistEntryResponse,
    inputs_response,
    picklist_response,
)
from .discovery_service import CapabilityDiscoveryService

router = APIRouter(
    prefix="/api/discovery",
    tags=["discovery"],
    dependencies=[Depends(require_admin_user)],
)


def get_discovery_service(request: Request) -> CapabilityDiscoveryService:
    try:
        return request.app.state.discovery_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("CapabilityDiscoveryService is not configured") from exc


def discovery_http_error(exc: DiscoveryError) -> HTTPException:
    """Translate a discovery failure into the admin API error shape."""
    if isinstance(exc, UnknownEndpointError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"status": "error", "failure_reason": "unknown_endpoint", "details": str(exc)},
        )
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail={"status": "error", "failure_reason": "discovery_failed", "details": str(exc)},
    )


@router.get("/objects", response_model=list[PicklistEntryResponse])
async def list_capable_objects(
    endpoint: str = Query(..., min_length=1),
    category: Category = Query(...),
    service: CapabilityDiscoveryService = Depends(get_discovery_service),
) -> list[PicklistEntryResponse]:
    try:
        entries = await service.list_capable_objects(endpoint, category)
    except DiscoveryError as exc:
        raise discovery_http_error(exc) from exc
    return picklist_response(entries)


@router.get("/operations", response_model=list[PicklistEntryResponse])
async def list_operations(
    endpoint: str = Query(..., min_length=1),
    category: Category = Query(...),
    object_name: str | None = Query(None),
    service: CapabilityDiscoveryService = Depends(get_discovery_service),
) -> list[PicklistEntryResponse]:
    try:
        entries = await service.list_operations(endpoint, category, object_name)
    except DiscoveryError as exc:
        raise discovery_http_error(exc) from exc
    return picklist_response(entries)


@router.get("/inputs", response_model=list[DiscoveredInputResponse])
async def list_operation_inputs(
    endpoint: str = Query(..., min_length=1),
    category: Category = Query(...),
    operation_name: str = Query(..., min_length=1),
    object_name: str | None = Query(None),
    service: CapabilityDiscoveryService = Depends(get_discovery_service),
) -> list[DiscoveredInputResponse]:
    try:
        inputs = await service.list_operation_inputs(
            endpoint, category, operation_name, object_name
        )
    except DiscoveryError as exc:
        raise discovery_http_error(exc) from exc
    return inputs_response(inputs)
