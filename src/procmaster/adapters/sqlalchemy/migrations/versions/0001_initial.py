"""Initial schema: candidate, master and indicator tables.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

from procmaster.adapters.sqlalchemy.mappings import UTCDateTime

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

INDICATOR_TYPES = (
    "ADMINISTRATIVE_COVERED_BY_GPA",
    "INTEGRITY_SINGLE_BID",
    "INTEGRITY_CALL_FOR_TENDER_PUBLICATION",
    "TRANSPARENCY_NUMBER_OF_KEY_MISSING_FIELDS",
)


def _create_matched(name: str) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("group_id", sa.String(), nullable=True),
        sa.Column("source", sa.String(), nullable=True),
        sa.Column("source_id", sa.String(), nullable=True),
        sa.Column("country", sa.String(2), nullable=True),
        sa.Column("publication_date", sa.Date(), nullable=True),
        sa.Column("modified", UTCDateTime(), nullable=True),
        sa.Column("data", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=f"pk_{name}"),
    )
    op.create_index(f"ix_{name}_group_id", name, ["group_id"])


def _create_master(name: str) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("group_id", sa.String(), nullable=False),
        sa.Column("persistent_id", sa.String(), nullable=True),
        sa.Column("country", sa.String(2), nullable=True),
        sa.Column("modified", UTCDateTime(), nullable=False),
        sa.Column("data", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=f"pk_{name}"),
        sa.UniqueConstraint("group_id", name=f"uq_{name}_group_id"),
    )
    op.create_index(f"ix_{name}_persistent_id", name, ["persistent_id"])
    op.create_index(f"ix_{name}_country", name, ["country"])
    op.create_index(f"ix_{name}_modified", name, ["modified"])


def upgrade() -> None:
    _create_matched("matched_tender")
    _create_matched("matched_body")
    _create_master("master_tender")
    _create_master("master_body")
    op.create_table(
        "indicator",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "type",
            sa.Enum(*INDICATOR_TYPES, name="indicatortype", native_enum=False),
            nullable=False,
        ),
        sa.Column("related_entity_id", sa.String(36), nullable=False),
        sa.Column("value", sa.Float(), nullable=True),
        sa.Column("metadata", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_indicator"),
        sa.UniqueConstraint("type", "related_entity_id", name="uq_indicator_type"),
    )
    op.create_index("ix_indicator_related_entity_id", "indicator", ["related_entity_id"])


def downgrade() -> None:
    op.drop_index("ix_indicator_related_entity_id", table_name="indicator")
    op.drop_table("indicator")
    for name in ("master_body", "master_tender"):
        op.drop_index(f"ix_{name}_modified", table_name=name)
        op.drop_index(f"ix_{name}_country", table_name=name)
        op.drop_index(f"ix_{name}_persistent_id", table_name=name)
        op.drop_table(name)
    for name in ("matched_body", "matched_tender"):
        op.drop_index(f"ix_{name}_group_id", table_name=name)
        op.drop_table(name)
