"""Capability discovery service used by the configuration pickers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx

from ..domain import Category
from ..domain.discovered import DiscoveredInput, PicklistEntry, sort_by_label
from ..endpoints.endpoints_registry import EndpointRegistry
from ..org.org_client import OrgClient
from .discovery_client import CapabilityClient
from .discovery_strategies import Connect, strategy_for

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CapabilityDiscoveryService:
    """Answer "which objects / operations / inputs exist" for a category.

    Calls are independent and stateless; failures surface as
    :class:`~massaction.discovery.discovery_errors.DiscoveryError`.
    """

    endpoints: EndpointRegistry
    org: OrgClient
    timeout_seconds: float = 30.0
    transport: httpx.AsyncBaseTransport | None = None
    log: logging.Logger = field(default_factory=lambda: logger)

    def client(self, endpoint_name: str) -> CapabilityClient:
        return CapabilityClient.for_endpoint(
            self.endpoints.get(endpoint_name),
            timeout_seconds=self.timeout_seconds,
            transport=self.transport,
        )

    def _connector(self, endpoint_name: str) -> Connect:
        return lambda: self.client(endpoint_name)

    def list_endpoints(self) -> list[PicklistEntry]:
        return self.endpoints.list_endpoints()

    async def list_capable_objects(
        self, endpoint_name: str, category: Category | str
    ) -> list[PicklistEntry]:
        strategy = strategy_for(category)
        names = await strategy.capable_object_names(self._connector(endpoint_name))
        if not names:
            return []

        local_schema = await self.org.global_describe()
        entries: list[PicklistEntry] = []
        for name in dict.fromkeys(names):
            label = local_schema.get(name)
            if label is None:
                self.log.debug(
                    "discovery.object.unresolved",
                    extra={"object_name": name, "category": str(category)},
                )
                continue
            entries.append(PicklistEntry(label=label, value=name))
        return sort_by_label(entries)

    async def list_operations(
        self, endpoint_name: str, category: Category | str, object_name: str | None = None
    ) -> list[PicklistEntry]:
        strategy = strategy_for(category)
        return await strategy.operations(self._connector(endpoint_name), object_name)

    async def list_operation_inputs(
        self,
        endpoint_name: str,
        category: Category | str,
        operation_name: str,
        object_name: str | None = None,
    ) -> list[DiscoveredInput]:
        strategy = strategy_for(category)
        return await strategy.inputs(self._connector(endpoint_name), operation_name, object_name)
