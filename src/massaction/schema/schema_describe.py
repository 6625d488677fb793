"""Describe the configuration object from its ORM metadata."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import sqlalchemy as sa

from ..db.db_models import Base, MassActionConfigurationModel
from ..domain import PicklistOption
from .namespace import NamespaceNormalizer


def _active_options(options: tuple[PicklistOption, ...]) -> list[dict[str, str]]:
    return [{"label": option.label, "value": option.value} for option in options if option.active]


@dataclass(slots=True)
class ConfigurationObjectDescriber:
    """Build a namespace-independent describe payload for the picker UI.

    Field keys are local names; ``name`` carries the qualified form for the
    current deployment. Labels, help text and picklists come from column
    ``info``; object labels and key prefix from the table ``info``.
    """

    normalizer: NamespaceNormalizer
    model: type[Base] = MassActionConfigurationModel

    def describe(self) -> dict[str, Any]:
        mapper = sa.inspect(self.model)
        table = mapper.local_table
        table_info = table.info

        fields: dict[str, dict[str, Any]] = {}
        for attribute in mapper.column_attrs:
            column_info = attribute.columns[0].info
            local_name = attribute.key
            fields[local_name] = {
                "name": self.normalizer.qualify(local_name),
                "local_name": local_name,
                "label": column_info.get("label", local_name),
                "help_text": column_info.get("help_text"),
                "picklist_values": _active_options(column_info.get("picklist", ())),
            }

        return {
            "name": self.normalizer.qualify(table.name),
            "local_name": table.name,
            "label": table_info.get("label", table.name),
            "label_plural": table_info.get("label_plural", table.name),
            "key_prefix": table_info.get("key_prefix"),
            "fields": fields,
        }
