"""Namespace qualification of object and field names.

Deployments may run under a namespace; names exchanged with the UI are always
the local (stripped) form so payloads are portable between deployments.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

SEPARATOR = "__"


@dataclass(frozen=True, slots=True)
class NamespaceNormalizer:
    namespace: str = ""

    @property
    def prefix(self) -> str:
        return f"{self.namespace}{SEPARATOR}" if self.namespace else ""

    def qualify(self, name: str) -> str:
        if not self.prefix or name.startswith(self.prefix):
            return name
        return f"{self.prefix}{name}"

    def strip(self, name: str) -> str:
        if self.prefix and name.startswith(self.prefix):
            return name[len(self.prefix) :]
        return name

    def strip_keys(self, values: Mapping[str, Any]) -> dict[str, Any]:
        return {self.strip(key): value for key, value in values.items()}
