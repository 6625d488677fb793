"""Enumerate bulk data sources and describe their columns."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..discovery.discovery_errors import DiscoveryError, OrgRequestError
from ..discovery.discovery_service import CapabilityDiscoveryService
from ..domain.discovered import DiscoveredColumn, PicklistEntry, canonical_id
from ..org.org_client import OrgClient
from ..org.rest_client import soql_literal

logger = logging.getLogger(__name__)


def _picklist(records: list[dict[str, Any]]) -> list[PicklistEntry]:
    return [
        PicklistEntry(label=str(row.get("Name") or row["Id"]), value=canonical_id(row["Id"]))
        for row in records
        if row.get("Id")
    ]


@dataclass(slots=True)
class DataSourceBrowser:
    """Reports come from the local org; list view columns need the remote endpoint."""

    org: OrgClient
    discovery: CapabilityDiscoveryService
    log: logging.Logger = field(default_factory=lambda: logger)

    async def list_report_folders(self) -> list[PicklistEntry]:
        records = await self.org.query(
            "SELECT Id, Name, DeveloperName FROM Folder "
            "WHERE Type = 'Report' AND DeveloperName != null ORDER BY Name"
        )
        # Folders without a developer name are system folders.
        return [
            PicklistEntry(label=str(row.get("Name") or row["Id"]), value=str(row["Id"]))
            for row in records
            if row.get("Id") and (row.get("DeveloperName") or "").strip()
        ]

    async def list_reports_in_folder(self, folder_id: str | None) -> list[PicklistEntry]:
        if not folder_id:
            return []
        records = await self.org.query(
            "SELECT Id, Name FROM Report "
            f"WHERE OwnerId = '{soql_literal(folder_id)}' AND Format = 'Tabular' ORDER BY Name"
        )
        return _picklist(records)

    async def describe_report_columns(self, report_id: str | None) -> list[DiscoveredColumn]:
        if not report_id:
            return []
        description = await self.org.describe_report(report_id)
        if description is None:
            return []

        try:
            column_names = description["reportMetadata"]["detailColumns"]
            column_info = description["reportExtendedMetadata"]["detailColumnInfo"]
        except (KeyError, TypeError) as exc:
            raise OrgRequestError(f"Report '{report_id}' description is malformed") from exc
        if not isinstance(column_names, list) or not isinstance(column_info, dict):
            raise OrgRequestError(f"Report '{report_id}' description is malformed")

        columns: list[DiscoveredColumn] = []
        for name in column_names:
            info = column_info.get(name)
            if not info:
                continue
            columns.append(
                DiscoveredColumn(
                    label=str(info.get("label") or name),
                    value=str(name),
                    data_type=info.get("dataType"),
                )
            )
        return columns

    async def list_list_views_for_object(self, object_name: str | None) -> list[PicklistEntry]:
        if not object_name:
            return []
        records = await self.org.query(
            "SELECT Id, Name FROM ListView "
            f"WHERE SobjectType = '{soql_literal(object_name)}' AND IsSoqlCompatible = true "
            "ORDER BY Name"
        )
        return _picklist(records)

    async def describe_list_view_columns(
        self, endpoint_name: str, list_view_id: str | None
    ) -> list[DiscoveredColumn]:
        if not list_view_id:
            return []

        records = await self.org.query(
            f"SELECT SobjectType FROM ListView WHERE Id = '{soql_literal(list_view_id)}'"
        )
        if not records or not records[0].get("SobjectType"):
            self.log.debug("sources.list_view.not_found", extra={"list_view_id": list_view_id})
            return []
        object_name = str(records[0]["SobjectType"])

        description = await self.discovery.client(endpoint_name).describe_list_view(
            object_name, list_view_id
        )
        if description is None:
            return []
        columns = description.get("columns") if isinstance(description, dict) else None
        if not isinstance(columns, list):
            raise DiscoveryError(f"List view '{list_view_id}' description is malformed")

        return [
            DiscoveredColumn(
                label=str(column.get("label") or column["fieldNameOrPath"]),
                value=str(column["fieldNameOrPath"]),
                data_type=column.get("type"),
            )
            for column in columns
            if isinstance(column, dict) and column.get("fieldNameOrPath")
        ]
