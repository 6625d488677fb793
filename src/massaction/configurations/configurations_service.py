"""Save and load mass action configurations."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..infrastructure.unit_of_work import UnitOfWork
from ..schema.namespace import NamespaceNormalizer
from .configurations_errors import ConfigurationSaveError, InvalidPayloadError
from .configurations_repository import ConfigurationRepository
from .configurations_schemas import parse_configuration_payload, parse_mapping_payload

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SaveResult:
    success: bool
    record_id: str


@dataclass(slots=True)
class ConfigurationService:
    """Persist a configuration header and its full mapping set as one unit.

    Every save replaces all mapping rows. There is no version check, so two
    concurrent saves of the same configuration resolve as last writer wins.
    """

    repo: ConfigurationRepository
    unit_of_work_factory: Callable[[], UnitOfWork]
    normalizer: NamespaceNormalizer = field(default_factory=NamespaceNormalizer)
    log: logging.Logger = field(default_factory=lambda: logger)

    def save_configuration(self, configuration_payload: str, mapping_payload: str) -> SaveResult:
        try:
            with self.unit_of_work_factory() as uow:
                payload = parse_configuration_payload(configuration_payload, self.normalizer)
                pairs = parse_mapping_payload(mapping_payload)
                row = self.repo.upsert(uow.session, payload)
                record_id = row.id
                mappings = self.repo.replace_mappings(uow.session, record_id, pairs)
        except InvalidPayloadError as exc:
            self.log.warning("configuration.save.rejected", extra={"reason": str(exc)})
            raise
        except Exception as exc:
            self.log.exception("configuration.save.failed")
            raise ConfigurationSaveError(str(exc)) from exc

        self.log.info(
            "configuration.saved",
            extra={"configuration_id": record_id, "mapping_count": len(mappings)},
        )
        return SaveResult(success=True, record_id=record_id)

    def load_configuration(self, configuration_id: str) -> dict[str, Any] | None:
        configuration = self.repo.get(configuration_id)
        if configuration is None:
            return None
        return configuration.to_payload()

    def load_field_mappings(self, configuration_id: str) -> dict[str, str]:
        return {
            mapping.target_field_name: mapping.source_field_name
            for mapping in self.repo.list_mappings(configuration_id)
        }
