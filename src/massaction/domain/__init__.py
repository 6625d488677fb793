"""Closed value sets shared by discovery, describe and persistence."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class PicklistOption:
    value: str
    label: str
    active: bool = True


class Category(str, Enum):
    """Kinds of target operation a mass action can invoke."""

    FLOW = "Flow"
    EMAIL_ALERT = "EmailAlert"
    WORKFLOW = "Workflow"
    APEX = "Apex"
    QUICK_ACTION = "QuickAction"


class SourceType(str, Enum):
    """Kinds of bulk data source."""

    REPORT = "Report"
    LIST_VIEW = "ListView"
    SOQL = "SOQL"
    APEX = "Apex"


CATEGORY_OPTIONS: tuple[PicklistOption, ...] = (
    PicklistOption(Category.FLOW.value, "Flow"),
    PicklistOption(Category.EMAIL_ALERT.value, "Email Alert"),
    PicklistOption(Category.WORKFLOW.value, "Workflow Rule"),
    PicklistOption(Category.APEX.value, "Invocable Apex"),
    PicklistOption(Category.QUICK_ACTION.value, "Quick Action"),
)

# SOQL and Apex sources are reserved values; only reports and list views are
# valid bulk data sources for now.
SOURCE_TYPE_OPTIONS: tuple[PicklistOption, ...] = (
    PicklistOption(SourceType.REPORT.value, "Report"),
    PicklistOption(SourceType.LIST_VIEW.value, "List View"),
    PicklistOption(SourceType.SOQL.value, "SOQL Query", active=False),
    PicklistOption(SourceType.APEX.value, "Apex Class", active=False),
)

ACTIVE_SOURCE_TYPES: frozenset[str] = frozenset(
    option.value for option in SOURCE_TYPE_OPTIONS if option.active
)

__all__ = [
    "ACTIVE_SOURCE_TYPES",
    "CATEGORY_OPTIONS",
    "Category",
    "PicklistOption",
    "SOURCE_TYPE_OPTIONS",
    "SourceType",
]
