"""Registry of named endpoints loaded from a JSON definition file.

File layout::

    {"endpoints": [{"name": "Mass_Action", "label": "Mass Action",
                    "base_url": "https://example.my.site", "token": "...",
                    "api_version": "58.0"}]}
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ..discovery.discovery_errors import UnknownEndpointError
from ..domain.discovered import PicklistEntry, sort_by_label

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "58.0"


@dataclass(frozen=True, slots=True)
class NamedEndpoint:
    name: str
    label: str
    base_url: str
    token: str = field(default="", repr=False)
    api_version: str = DEFAULT_API_VERSION


@dataclass(slots=True)
class EndpointRegistry:
    endpoints: dict[str, NamedEndpoint] = field(default_factory=dict)
    hidden_names: frozenset[str] = frozenset()

    @classmethod
    def from_file(
        cls,
        path: Path,
        *,
        hidden_names: Iterable[str] = (),
        default_api_version: str = DEFAULT_API_VERSION,
    ) -> "EndpointRegistry":
        if not path.exists():
            logger.warning("endpoints.file.missing", extra={"path": str(path)})
            return cls(hidden_names=frozenset(hidden_names))

        raw = json.loads(path.read_text(encoding="utf-8"))
        entries = raw.get("endpoints")
        if not isinstance(entries, list):
            raise ValueError("Invalid endpoints file: 'endpoints' must be an array")

        endpoints: dict[str, NamedEndpoint] = {}
        for entry in entries:
            name = entry.get("name")
            base_url = entry.get("base_url")
            if not name or not base_url:
                raise ValueError("Each endpoint entry must contain name and base_url")
            endpoints[name] = NamedEndpoint(
                name=name,
                label=entry.get("label") or name,
                base_url=base_url,
                token=entry.get("token", ""),
                api_version=str(entry.get("api_version") or default_api_version),
            )
        return cls(endpoints=endpoints, hidden_names=frozenset(hidden_names))

    def get(self, name: str) -> NamedEndpoint:
        try:
            return self.endpoints[name]
        except KeyError:
            raise UnknownEndpointError(f"Named endpoint '{name}' is not configured") from None

    def list_endpoints(self) -> list[PicklistEntry]:
        """Return visible endpoints as picker entries ordered by label."""
        return sort_by_label(
            [
                PicklistEntry(label=endpoint.label, value=endpoint.name)
                for endpoint in self.endpoints.values()
                if endpoint.name not in self.hidden_names
            ]
        )
