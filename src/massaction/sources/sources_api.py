"""Admin routes for bulk data source pickers."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from ..auth.auth_dependencies import require_admin_user
from ..discovery.discovery_api import discovery_http_error
from ..discovery.discovery_errors import DiscoveryError
from ..discovery.discovery_schemas import (
    DiscoveredColumnResponse,
    PicklistEntryResponse,
    columns_response,
    picklist_response,
)
from .sources_service import DataSourceBrowser

router = APIRouter(
    prefix="/api/sources",
    tags=["sources"],
    dependencies=[Depends(require_admin_user)],
)


def get_source_browser(request: Request) -> DataSourceBrowser:
    try:
        return request.app.state.source_browser  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("DataSourceBrowser is not configured") from exc


@router.get("/report-folders", response_model=list[PicklistEntryResponse])
async def list_report_folders(
    browser: DataSourceBrowser = Depends(get_source_browser),
) -> list[PicklistEntryResponse]:
    try:
        return picklist_response(await browser.list_report_folders())
    except DiscoveryError as exc:
        raise discovery_http_error(exc) from exc


@router.get("/report-folders/{folder_id}/reports", response_model=list[PicklistEntryResponse])
async def list_reports_in_folder(
    folder_id: str,
    browser: DataSourceBrowser = Depends(get_source_browser),
) -> list[PicklistEntryResponse]:
    try:
        return picklist_response(await browser.list_reports_in_folder(folder_id))
    except DiscoveryError as exc:
        raise discovery_http_error(exc) from exc


@router.get("/reports/columns", response_model=list[DiscoveredColumnResponse])
async def describe_report_columns(
    report_id: str | None = Query(None),
    browser: DataSourceBrowser = Depends(get_source_browser),
) -> list[DiscoveredColumnResponse]:
    try:
        return columns_response(await browser.describe_report_columns(report_id))
    except DiscoveryError as exc:
        raise discovery_http_error(exc) from exc


@router.get("/list-views", response_model=list[PicklistEntryResponse])
async def list_list_views_for_object(
    object_name: str | None = Query(None),
    browser: DataSourceBrowser = Depends(get_source_browser),
) -> list[PicklistEntryResponse]:
    try:
        return picklist_response(await browser.list_list_views_for_object(object_name))
    except DiscoveryError as exc:
        raise discovery_http_error(exc) from exc


@router.get("/list-views/columns", response_model=list[DiscoveredColumnResponse])
async def describe_list_view_columns(
    endpoint: str = Query(..., min_length=1),
    list_view_id: str | None = Query(None),
    browser: DataSourceBrowser = Depends(get_source_browser),
) -> list[DiscoveredColumnResponse]:
    try:
        return columns_response(await browser.describe_list_view_columns(endpoint, list_view_id))
    except DiscoveryError as exc:
        raise discovery_http_error(exc) from exc
