"""Admin route listing the named endpoints available to configurations."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from ..auth.auth_dependencies import require_admin_user
from ..discovery.discovery_schemas import PicklistEntryResponse, picklist_response
from .endpoints_registry import EndpointRegistry

router = APIRouter(
    prefix="/api/endpoints",
    tags=["endpoints"],
    dependencies=[Depends(require_admin_user)],
)


def get_endpoint_registry(request: Request) -> EndpointRegistry:
    try:
        return request.app.state.endpoint_registry  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("EndpointRegistry is not configured") from exc


@router.get("", response_model=list[PicklistEntryResponse])
def list_endpoints(
    registry: EndpointRegistry = Depends(get_endpoint_registry),
) -> list[PicklistEntryResponse]:
    return picklist_response(registry.list_endpoints())
