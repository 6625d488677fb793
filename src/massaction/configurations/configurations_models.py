"""Configuration domain dataclasses."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any


@dataclass(slots=True)
class FieldMapping:
    configuration_id: str
    target_field_name: str
    source_field_name: str


@dataclass(slots=True)
class MassActionConfiguration:
    id: str
    label: str
    source_type: str
    target_type: str
    developer_name: str | None = None
    description: str | None = None
    active: bool = False
    batch_size: int = 200
    endpoint_name: str | None = None
    source_report_id: str | None = None
    source_report_column_name: str | None = None
    source_list_view_id: str | None = None
    source_object_name: str | None = None
    target_action_name: str | None = None
    target_object_name: str | None = None
    schedule: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    mappings: list[FieldMapping] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """Header fields keyed by local name, without the mapping rows."""
        payload = asdict(self)
        payload.pop("mappings")
        return payload
