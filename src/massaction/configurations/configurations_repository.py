"""Configuration repository backed by SQLAlchemy."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime
from uuid import uuid4

from sqlalchemy import delete
from sqlalchemy.orm import Session

from ..db.db_models import CONFIGURATION_KEY_PREFIX, FieldMappingModel, MassActionConfigurationModel
from ..exceptions import ensure_found, handle_sqlalchemy_errors
from .configurations_models import FieldMapping, MassActionConfiguration
from .configurations_schemas import ConfigurationPayload


READ_ONLY_FIELDS = {"id", "created_at", "updated_at"}


def new_configuration_id() -> str:
    return f"{CONFIGURATION_KEY_PREFIX}{uuid4().hex[:15]}"


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class ConfigurationRepository:
    """Reads open their own session; writes join the caller's unit of work."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def get(self, configuration_id: str) -> MassActionConfiguration | None:
        with self._session_factory() as session:
            row = session.get(MassActionConfigurationModel, configuration_id)
            if row is None:
                return None
            return self._to_domain(row, self._mapping_rows(session, configuration_id))

    def list_mappings(self, configuration_id: str) -> list[FieldMapping]:
        with self._session_factory() as session:
            return [
                self._to_mapping_domain(row)
                for row in self._mapping_rows(session, configuration_id)
            ]

    def upsert(self, session: Session, payload: ConfigurationPayload) -> MassActionConfigurationModel:
        """Insert when ``payload.id`` is empty, otherwise overwrite the stored header."""
        values = payload.model_dump(exclude=READ_ONLY_FIELDS)
        now = datetime.utcnow()

        if payload.id is None:
            row = MassActionConfigurationModel(id=new_configuration_id(), created_at=now, **values)
            session.add(row)
        else:
            row = session.get(MassActionConfigurationModel, payload.id)
            ensure_found(row, entity="mass_action_configuration", identifier=payload.id)
            for key, value in values.items():
                setattr(row, key, value)
        row.updated_at = now

        with handle_sqlalchemy_errors(entity="mass_action_configuration"):
            session.flush()
        return row

    def replace_mappings(
        self,
        session: Session,
        configuration_id: str,
        pairs: Iterable[tuple[str, str | None]],
    ) -> list[FieldMappingModel]:
        """Delete every mapping row of the configuration and insert ``pairs``.

        Pairs with a blank source field are unmapped and produce no row.
        """
        rows = [
            FieldMappingModel(
                configuration_id=configuration_id,
                target_field_name=target,
                source_field_name=source,
            )
            for target, source in pairs
            if not is_blank(source)
        ]
        with handle_sqlalchemy_errors(entity="mass_action_mapping"):
            session.execute(
                delete(FieldMappingModel).where(
                    FieldMappingModel.configuration_id == configuration_id
                )
            )
            session.add_all(rows)
            session.flush()
        return rows

    @staticmethod
    def _mapping_rows(session: Session, configuration_id: str) -> list[FieldMappingModel]:
        return (
            session.query(FieldMappingModel)
            .filter(FieldMappingModel.configuration_id == configuration_id)
            .order_by(FieldMappingModel.id)
            .all()
        )

    @staticmethod
    def _to_mapping_domain(row: FieldMappingModel) -> FieldMapping:
        return FieldMapping(
            configuration_id=row.configuration_id,
            target_field_name=row.target_field_name,
            source_field_name=row.source_field_name,
        )

    @classmethod
    def _to_domain(
        cls, row: MassActionConfigurationModel, mappings: list[FieldMappingModel]
    ) -> MassActionConfiguration:
        return MassActionConfiguration(
            id=row.id,
            label=row.label,
            source_type=row.source_type,
            target_type=row.target_type,
            developer_name=row.developer_name,
            description=row.description,
            active=row.active,
            batch_size=row.batch_size,
            endpoint_name=row.endpoint_name,
            source_report_id=row.source_report_id,
            source_report_column_name=row.source_report_column_name,
            source_list_view_id=row.source_list_view_id,
            source_object_name=row.source_object_name,
            target_action_name=row.target_action_name,
            target_object_name=row.target_object_name,
            schedule=row.schedule,
            created_at=row.created_at,
            updated_at=row.updated_at,
            mappings=[cls._to_mapping_domain(mapping) for mapping in mappings],
        )
