"""Ephemeral shapes produced by discovery calls; never persisted."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PicklistEntry:
    label: str
    value: str


@dataclass(frozen=True, slots=True)
class DiscoveredInput:
    label: str
    name: str
    data_type: str
    required: bool = False
    description: str | None = None


@dataclass(frozen=True, slots=True)
class DiscoveredColumn:
    label: str
    value: str
    data_type: str | None = None


def canonical_id(value: str | None) -> str:
    """Return the 15 character form of a record identifier."""
    return (value or "")[:15]


def sort_by_label(entries: list[PicklistEntry]) -> list[PicklistEntry]:
    """Order by label, then value, using ordinal string comparison."""
    return sorted(entries, key=lambda entry: (entry.label, entry.value))
