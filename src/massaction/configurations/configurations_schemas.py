"""Pydantic schemas and payload parsing for configuration saves."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
)

from ..domain import ACTIVE_SOURCE_TYPES, Category, SourceType
from ..schema.namespace import NamespaceNormalizer
from .configurations_errors import InvalidPayloadError


class ConfigurationPayload(BaseModel):
    """Configuration header as submitted by the UI; unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid", use_enum_values=True)

    id: StrictStr | None = Field(default=None, max_length=18)
    label: StrictStr = Field(..., min_length=1, max_length=80)
    developer_name: StrictStr | None = Field(default=None, max_length=80)
    description: StrictStr | None = None
    active: StrictBool = False
    batch_size: StrictInt = Field(default=200, ge=1, le=2000)
    endpoint_name: StrictStr | None = Field(default=None, max_length=80)
    source_type: SourceType
    source_report_id: StrictStr | None = Field(default=None, max_length=18)
    source_report_column_name: StrictStr | None = Field(default=None, max_length=255)
    source_list_view_id: StrictStr | None = Field(default=None, max_length=18)
    source_object_name: StrictStr | None = Field(default=None, max_length=255)
    target_type: Category
    target_action_name: StrictStr | None = Field(default=None, max_length=255)
    target_object_name: StrictStr | None = Field(default=None, max_length=255)
    schedule: dict[str, Any] | None = None
    # Maintained by the repository; accepted so a loaded payload can be saved back.
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("id")
    @classmethod
    def _blank_id_means_insert(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @field_validator("source_type")
    @classmethod
    def _source_type_is_active(cls, value: Any) -> Any:
        raw = getattr(value, "value", value)
        if raw not in ACTIVE_SOURCE_TYPES:
            raise ValueError(f"source type '{raw}' is not supported")
        return value


class _Pairs(list):
    """JSON object decoded as ordered ``(key, value)`` pairs."""


def _decode(raw: str, *, what: str) -> Any:
    try:
        return json.loads(raw, object_pairs_hook=_Pairs)
    except (TypeError, json.JSONDecodeError) as exc:
        raise InvalidPayloadError(f"{what} payload is not valid JSON") from exc


def parse_configuration_payload(
    raw: str, normalizer: NamespaceNormalizer
) -> ConfigurationPayload:
    decoded = _decode(raw, what="configuration")
    if not isinstance(decoded, _Pairs):
        raise InvalidPayloadError("configuration payload must be a JSON object")
    keys = [normalizer.strip(key) for key, _ in decoded]
    if len(keys) != len(set(keys)):
        raise InvalidPayloadError("configuration payload contains duplicate fields")
    values = {key: _plain(value) for key, (_, value) in zip(keys, decoded)}
    try:
        return ConfigurationPayload.model_validate(values)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'payload'}: {error['msg']}"
            for error in exc.errors()
        )
        raise InvalidPayloadError(f"invalid configuration payload: {problems}") from exc


def parse_mapping_payload(raw: str) -> list[tuple[str, str | None]]:
    """Return ``(target_field, source_field)`` pairs in submission order.

    Duplicate target keys are kept so the storage unique constraint rejects
    them instead of the last value silently winning.
    """
    decoded = _decode(raw, what="mapping")
    if not isinstance(decoded, _Pairs):
        raise InvalidPayloadError("mapping payload must be a JSON object")
    pairs: list[tuple[str, str | None]] = []
    for target, source in decoded:
        if source is not None and not isinstance(source, str):
            raise InvalidPayloadError(
                f"mapping for '{target}' must be a field name string or null"
            )
        pairs.append((target, source))
    return pairs


def _plain(value: Any) -> Any:
    if isinstance(value, _Pairs):
        return {key: _plain(item) for key, item in value}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


class SaveConfigurationRequest(BaseModel):
    configuration: str = Field(..., description="Configuration header as a JSON document")
    mappings: str = Field(default="{}", description="Target input -> source field JSON object")


class SaveConfigurationResponse(BaseModel):
    success: bool
    record_id: str


class ConfigurationResponse(BaseModel):
    id: str
    label: str
    developer_name: str | None = None
    description: str | None = None
    active: bool
    batch_size: int
    endpoint_name: str | None = None
    source_type: str
    source_report_id: str | None = None
    source_report_column_name: str | None = None
    source_list_view_id: str | None = None
    source_object_name: str | None = None
    target_type: str
    target_action_name: str | None = None
    target_object_name: str | None = None
    schedule: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
