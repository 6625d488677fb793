"""Mass action configuration and field mapping tables."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20261017_01"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "mass_action_configuration",
        sa.Column("id", sa.String(length=18), primary_key=True),
        sa.Column("label", sa.String(length=80), nullable=False),
        sa.Column("developer_name", sa.String(length=80), unique=True),
        sa.Column("description", sa.Text()),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("batch_size", sa.Integer(), nullable=False, server_default="200"),
        sa.Column("endpoint_name", sa.String(length=80)),
        sa.Column("source_type", sa.String(length=32), nullable=False),
        sa.Column("source_report_id", sa.String(length=18)),
        sa.Column("source_report_column_name", sa.String(length=255)),
        sa.Column("source_list_view_id", sa.String(length=18)),
        sa.Column("source_object_name", sa.String(length=255)),
        sa.Column("target_type", sa.String(length=32), nullable=False),
        sa.Column("target_action_name", sa.String(length=255)),
        sa.Column("target_object_name", sa.String(length=255)),
        sa.Column("schedule", sa.JSON()),
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    )

    op.create_table(
        "mass_action_mapping",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "configuration_id",
            sa.String(length=18),
            sa.ForeignKey("mass_action_configuration.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("target_field_name", sa.String(length=255), nullable=False),
        sa.Column("source_field_name", sa.String(length=255), nullable=False),
        sa.UniqueConstraint(
            "configuration_id",
            "target_field_name",
            name="uq_mass_action_mapping_target",
        ),
    )
    op.create_index(
        "ix_mass_action_mapping_configuration_id",
        "mass_action_mapping",
        ["configuration_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_mass_action_mapping_configuration_id", table_name="mass_action_mapping")
    op.drop_table("mass_action_mapping")
    op.drop_table("mass_action_configuration")
