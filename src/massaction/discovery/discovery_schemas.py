"""Pydantic schemas for picker responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from ..domain.discovered import DiscoveredColumn, DiscoveredInput, PicklistEntry


class PicklistEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    label: str
    value: str


class DiscoveredInputResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    label: str
    name: str
    data_type: str
    required: bool
    description: str | None = None


class DiscoveredColumnResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    label: str
    value: str
    data_type: str | None = None


def picklist_response(entries: list[PicklistEntry]) -> list[PicklistEntryResponse]:
    return [PicklistEntryResponse.model_validate(entry) for entry in entries]


def inputs_response(inputs: list[DiscoveredInput]) -> list[DiscoveredInputResponse]:
    return [DiscoveredInputResponse.model_validate(item) for item in inputs]


def columns_response(columns: list[DiscoveredColumn]) -> list[DiscoveredColumnResponse]:
    return [DiscoveredColumnResponse.model_validate(column) for column in columns]
