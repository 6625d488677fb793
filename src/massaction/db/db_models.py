"""SQLAlchemy ORM models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from ..domain import CATEGORY_OPTIONS, SOURCE_TYPE_OPTIONS

CONFIGURATION_KEY_PREFIX = "m0A"


class Base(DeclarativeBase):
    """Base declarative class."""


class MassActionConfigurationModel(Base):
    __tablename__ = "mass_action_configuration"
    __table_args__ = {
        "info": {
            "label": "Mass Action Configuration",
            "label_plural": "Mass Action Configurations",
            "key_prefix": CONFIGURATION_KEY_PREFIX,
        }
    }

    id: Mapped[str] = mapped_column(String(18), primary_key=True, info={"label": "Record ID"})
    label: Mapped[str] = mapped_column(
        String(80),
        nullable=False,
        info={"label": "Name", "help_text": "Display name of the mass action."},
    )
    developer_name: Mapped[str | None] = mapped_column(
        String(80),
        unique=True,
        info={
            "label": "Unique Name",
            "help_text": "API name used by schedulers and integrations.",
        },
    )
    description: Mapped[str | None] = mapped_column(Text, info={"label": "Description"})
    active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        info={
            "label": "Active",
            "help_text": "Only active configurations are picked up by the scheduler.",
        },
    )
    batch_size: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=200,
        info={
            "label": "Batch Size",
            "help_text": "Number of source records passed to the target action per invocation.",
        },
    )
    endpoint_name: Mapped[str | None] = mapped_column(
        String(80),
        info={
            "label": "Named Endpoint",
            "help_text": "Endpoint used to discover and invoke the target action.",
        },
    )
    source_type: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        info={
            "label": "Source Type",
            "help_text": "Where the records to process come from.",
            "picklist": SOURCE_TYPE_OPTIONS,
        },
    )
    source_report_id: Mapped[str | None] = mapped_column(
        String(18), info={"label": "Source Report ID"}
    )
    source_report_column_name: Mapped[str | None] = mapped_column(
        String(255),
        info={
            "label": "Source Report Column Name",
            "help_text": "Report column that holds the record ID of each row.",
        },
    )
    source_list_view_id: Mapped[str | None] = mapped_column(
        String(18), info={"label": "Source List View ID"}
    )
    source_object_name: Mapped[str | None] = mapped_column(
        String(255), info={"label": "Source Object"}
    )
    target_type: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        info={
            "label": "Target Type",
            "help_text": "Kind of action invoked for every source record.",
            "picklist": CATEGORY_OPTIONS,
        },
    )
    target_action_name: Mapped[str | None] = mapped_column(
        String(255), info={"label": "Target Action Name"}
    )
    target_object_name: Mapped[str | None] = mapped_column(
        String(255),
        info={
            "label": "Target Object",
            "help_text": "Object the action is defined on, for object-specific actions.",
        },
    )
    schedule: Mapped[dict[str, Any] | None] = mapped_column(
        JSON,
        info={
            "label": "Schedule",
            "help_text": "Scheduling descriptor consumed by the batch executor.",
        },
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False, info={"label": "Created Date"}
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False, info={"label": "Last Modified Date"}
    )

    mappings: Mapped[list["FieldMappingModel"]] = relationship(
        back_populates="configuration",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="FieldMappingModel.id",
    )


class FieldMappingModel(Base):
    __tablename__ = "mass_action_mapping"
    __table_args__ = (
        UniqueConstraint(
            "configuration_id",
            "target_field_name",
            name="uq_mass_action_mapping_target",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    configuration_id: Mapped[str] = mapped_column(
        String(18),
        ForeignKey("mass_action_configuration.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    target_field_name: Mapped[str] = mapped_column(String(255), nullable=False)
    source_field_name: Mapped[str] = mapped_column(String(255), nullable=False)

    configuration: Mapped[MassActionConfigurationModel] = relationship(back_populates="mappings")
