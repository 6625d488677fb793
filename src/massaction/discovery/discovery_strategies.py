"""Per-category discovery strategies.

Each :class:`~massaction.domain.Category` maps to exactly one strategy via
:func:`strategy_for`. Strategies receive a ``connect`` callable instead of a
client so categories that never talk to the remote service do not need a
resolvable endpoint.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from ..domain import Category
from ..domain.discovered import DiscoveredInput, PicklistEntry
from ..org.rest_client import soql_literal
from .discovery_client import CapabilityClient
from .discovery_errors import DiscoveryError

Connect = Callable[[], CapabilityClient]

RECORD_ID_INPUT = DiscoveredInput(
    label="Record ID",
    name="ContextId",
    data_type="ID",
    required=True,
    description=None,
)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def _to_operation(entry: Any) -> PicklistEntry:
    if not isinstance(entry, dict) or not entry.get("name"):
        raise DiscoveryError(f"Malformed action entry: {entry!r}")
    name = str(entry["name"])
    return PicklistEntry(label=str(entry.get("label") or name), value=name)


def _to_input(entry: Any) -> DiscoveredInput:
    if not isinstance(entry, dict) or not entry.get("name"):
        raise DiscoveryError(f"Malformed action input: {entry!r}")
    name = str(entry["name"])
    return DiscoveredInput(
        label=str(entry.get("label") or name),
        name=name,
        data_type=str(entry.get("type") or "").upper(),
        required=_as_bool(entry.get("required")),
        description=entry.get("description") or None,
    )


class DiscoveryStrategy(ABC):
    """How one category answers the object/operation/input questions."""

    @abstractmethod
    async def capable_object_names(self, connect: Connect) -> list[str]:
        """Object names having at least one operation of this category."""

    @abstractmethod
    async def operations(self, connect: Connect, object_name: str | None) -> list[PicklistEntry]:
        """Operations in the order the remote service returned them."""

    @abstractmethod
    async def inputs(
        self, connect: Connect, operation_name: str, object_name: str | None
    ) -> list[DiscoveredInput]:
        """Typed input schema for ``operation_name``."""


class GlobalActionStrategy(DiscoveryStrategy):
    """Actions that are not bound to an object (flows, invocable Apex)."""

    def __init__(self, action_type: str) -> None:
        self.action_type = action_type

    async def capable_object_names(self, connect: Connect) -> list[str]:
        return []

    async def operations(self, connect: Connect, object_name: str | None) -> list[PicklistEntry]:
        actions = await connect().list_actions(self.action_type)
        return [_to_operation(entry) for entry in actions]

    async def inputs(
        self, connect: Connect, operation_name: str, object_name: str | None
    ) -> list[DiscoveredInput]:
        entries = await connect().describe_action_inputs(self.action_type, operation_name)
        return [_to_input(entry) for entry in entries]


class ObjectScopedActionStrategy(DiscoveryStrategy):
    """Actions defined per object (email alerts, quick actions)."""

    def __init__(self, action_type: str) -> None:
        self.action_type = action_type

    async def capable_object_names(self, connect: Connect) -> list[str]:
        return await connect().list_action_objects(self.action_type)

    async def operations(self, connect: Connect, object_name: str | None) -> list[PicklistEntry]:
        if not object_name:
            return []
        actions = await connect().list_actions(self.action_type, object_name)
        return [_to_operation(entry) for entry in actions]

    async def inputs(
        self, connect: Connect, operation_name: str, object_name: str | None
    ) -> list[DiscoveredInput]:
        name = operation_name
        if object_name and name.startswith(f"{object_name}."):
            name = name[len(object_name) + 1 :]
        entries = await connect().describe_action_inputs(self.action_type, name, object_name)
        return [_to_input(entry) for entry in entries]


class WorkflowRuleStrategy(DiscoveryStrategy):
    """Workflow rules: discovered through the tooling API, fixed input contract."""

    async def capable_object_names(self, connect: Connect) -> list[str]:
        records = await connect().tooling_query("SELECT TableEnumOrId FROM WorkflowRule")
        return [str(row["TableEnumOrId"]) for row in records if row.get("TableEnumOrId")]

    async def operations(self, connect: Connect, object_name: str | None) -> list[PicklistEntry]:
        if not object_name:
            return []
        records = await connect().tooling_query(
            "SELECT Id, Name FROM WorkflowRule "
            f"WHERE TableEnumOrId = '{soql_literal(object_name)}' ORDER BY Name"
        )
        return [
            PicklistEntry(label=str(row["Name"]), value=str(row["Name"]))
            for row in records
            if row.get("Name")
        ]

    async def inputs(
        self, connect: Connect, operation_name: str, object_name: str | None
    ) -> list[DiscoveredInput]:
        # Every workflow rule is triggered the same way: by the record id.
        return [RECORD_ID_INPUT]


_STRATEGIES: dict[Category, DiscoveryStrategy] = {
    Category.FLOW: GlobalActionStrategy("flow"),
    Category.APEX: GlobalActionStrategy("apex"),
    Category.EMAIL_ALERT: ObjectScopedActionStrategy("emailAlert"),
    Category.QUICK_ACTION: ObjectScopedActionStrategy("quickAction"),
    Category.WORKFLOW: WorkflowRuleStrategy(),
}


def strategy_for(category: Category | str) -> DiscoveryStrategy:
    """Return the discovery strategy registered for ``category``."""
    try:
        return _STRATEGIES[Category(category)]
    except ValueError:
        raise DiscoveryError(f"Unsupported category '{category}'") from None
