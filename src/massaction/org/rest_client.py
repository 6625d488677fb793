"""Minimal JSON-over-HTTP client shared by the org and capability clients."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

import httpx

from ..discovery.discovery_errors import DiscoveryError

logger = logging.getLogger(__name__)


def path_segment(value: str) -> str:
    """Quote a value for use as a single URL path segment."""
    return quote(value, safe="")


def soql_literal(value: str) -> str:
    """Escape a value for embedding inside a quoted SOQL string literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, list) and body and isinstance(body[0], dict):
        body = body[0]
    if isinstance(body, dict):
        message = body.get("message") or body.get("error") or ""
        code = body.get("errorCode")
        return f"{code}: {message}" if code else str(message)
    return str(body)[:200]


@dataclass(slots=True)
class RestClient:
    """Issue authenticated GET requests and decode JSON responses.

    Every failure (transport, non-2xx status, non-JSON body) is raised as
    ``error_cls``; nothing is retried.
    """

    base_url: str
    api_version: str
    token: str = field(default="", repr=False)
    timeout_seconds: float = 30.0
    transport: httpx.AsyncBaseTransport | None = None
    error_cls: type[DiscoveryError] = DiscoveryError
    log: logging.Logger = field(default_factory=lambda: logger)

    @property
    def api_root(self) -> str:
        return f"{self.base_url.rstrip('/')}/services/data/v{self.api_version}"

    def _url(self, path: str) -> str:
        if path.startswith("/"):
            return f"{self.base_url.rstrip('/')}{path}"
        return f"{self.api_root}/{path}"

    async def get_json(
        self,
        path: str,
        *,
        params: dict[str, str] | None = None,
        allow_missing: bool = False,
    ) -> Any:
        """GET ``path`` and return the decoded body (``None`` on 404 when allowed)."""
        url = self._url(path)
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self.transport
            ) as client:
                response = await client.get(url, headers=headers, params=params)
        except httpx.HTTPError as exc:
            self.log.warning("rest.request.failed", extra={"url": url, "error": str(exc)})
            raise self.error_cls(f"Request to {path} failed: {exc}") from exc

        if response.status_code == 404 and allow_missing:
            return None
        if not response.is_success:
            detail = _error_detail(response)
            self.log.warning(
                "rest.request.rejected",
                extra={"url": url, "status_code": response.status_code, "detail": detail},
            )
            raise self.error_cls(
                f"Request to {path} failed with status {response.status_code}: {detail}"
            )

        try:
            return response.json()
        except ValueError as exc:
            raise self.error_cls(f"Request to {path} returned a non-JSON body") from exc

    async def query(self, soql: str, *, resource: str = "query") -> list[dict[str, Any]]:
        """Run a SOQL query and return all records, following pagination."""
        records: list[dict[str, Any]] = []
        body = await self.get_json(resource, params={"q": soql})
        while True:
            if not isinstance(body, dict) or not isinstance(body.get("records"), list):
                raise self.error_cls(f"Query response for '{soql}' is missing records")
            records.extend(body["records"])
            next_url = body.get("nextRecordsUrl")
            if body.get("done", True) or not next_url:
                return records
            body = await self.get_json(next_url)
