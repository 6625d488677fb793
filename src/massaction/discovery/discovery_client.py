"""HTTP client for a remote capability-description service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from ..endpoints.endpoints_registry import NamedEndpoint
from ..org.rest_client import RestClient, path_segment
from .discovery_errors import DiscoveryError


def _action_path(action_type: str, *segments: str | None) -> str:
    parts = [path_segment(action_type)] + [path_segment(s) for s in segments if s]
    return "actions/custom/" + "/".join(parts)


@dataclass(slots=True)
class CapabilityClient(RestClient):
    """Wraps the action describe resources exposed through a named endpoint."""

    @classmethod
    def for_endpoint(
        cls,
        endpoint: NamedEndpoint,
        *,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "CapabilityClient":
        return cls(
            base_url=endpoint.base_url,
            api_version=endpoint.api_version,
            token=endpoint.token,
            timeout_seconds=timeout_seconds,
            transport=transport,
        )

    async def list_action_objects(self, action_type: str) -> list[str]:
        """Object names that have at least one action of ``action_type``."""
        body = await self.get_json(_action_path(action_type))
        if not isinstance(body, dict):
            raise DiscoveryError(f"Unexpected object listing for action type '{action_type}'")
        return [str(name) for name in body]

    async def list_actions(
        self, action_type: str, object_name: str | None = None
    ) -> list[dict[str, Any]]:
        body = await self.get_json(_action_path(action_type, object_name))
        actions = body.get("actions") if isinstance(body, dict) else None
        if not isinstance(actions, list):
            raise DiscoveryError(f"Action listing for '{action_type}' is missing 'actions'")
        return actions

    async def describe_action_inputs(
        self, action_type: str, action_name: str, object_name: str | None = None
    ) -> list[dict[str, Any]]:
        body = await self.get_json(_action_path(action_type, object_name, action_name))
        inputs = body.get("inputs") if isinstance(body, dict) else None
        if not isinstance(inputs, list):
            raise DiscoveryError(f"Action describe for '{action_name}' is missing 'inputs'")
        return inputs

    async def tooling_query(self, soql: str) -> list[dict[str, Any]]:
        return await self.query(soql, resource="tooling/query")

    async def describe_list_view(self, object_name: str, list_view_id: str) -> dict[str, Any] | None:
        return await self.get_json(
            f"sobjects/{path_segment(object_name)}/listviews/{path_segment(list_view_id)}/describe",
            allow_missing=True,
        )
