"""Client for the deployment's own platform API (the "local" org)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from ..config import OrgSettings
from ..discovery.discovery_errors import OrgRequestError
from .rest_client import RestClient, path_segment


@dataclass(slots=True)
class OrgClient(RestClient):
    """Local schema, SOQL and report metadata lookups."""

    error_cls: type[OrgRequestError] = OrgRequestError

    @classmethod
    def from_settings(
        cls, settings: OrgSettings, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> "OrgClient":
        return cls(
            base_url=settings.base_url,
            api_version=settings.api_version,
            token=settings.access_token,
            timeout_seconds=settings.timeout_seconds,
            transport=transport,
        )

    async def global_describe(self) -> dict[str, str]:
        """Return object API name -> label for every object in the local schema."""
        body = await self.get_json("sobjects")
        objects = body.get("sobjects") if isinstance(body, dict) else None
        if not isinstance(objects, list):
            raise OrgRequestError("Global describe response is missing 'sobjects'")
        return {
            entry["name"]: entry.get("label") or entry["name"]
            for entry in objects
            if isinstance(entry, dict) and entry.get("name")
        }

    async def describe_report(self, report_id: str) -> dict[str, Any] | None:
        """Return the structured report description, or ``None`` if not found."""
        return await self.get_json(
            f"analytics/reports/{path_segment(report_id)}/describe", allow_missing=True
        )
