"""initial schema

Revision ID: 0001
Revises:
Create Date: 2025-05-24 00:00:00.000000

profiles, activities and grid_intensity.
grid_intensity.date is unique: the ingestion job upserts one row per day.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- ENUM types ---
    activity_category_enum = sa.Enum(
        "driving", "electricity", name="activity_category_enum"
    )
    activity_category_enum.create(op.get_bind(), checkfirst=True)

    # --- profiles ---
    op.create_table(
        "profiles",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner", sa.String(128), nullable=False),
        sa.Column("display_name", sa.String(128), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_profiles_id", "profiles", ["id"])
    op.create_index("ix_profiles_owner", "profiles", ["owner"], unique=True)

    # --- activities ---
    op.create_table(
        "activities",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner", sa.String(128), nullable=False),
        sa.Column("category", sa.Enum(
            "driving", "electricity",
            name="activity_category_enum", create_type=False,
        ), nullable=False),
        sa.Column("amount", sa.Numeric(18, 4), nullable=False),
        sa.Column("emitted_mass", sa.Numeric(18, 3), nullable=False),
        sa.Column("recorded_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_activities_id", "activities", ["id"])
    op.create_index("ix_activities_owner", "activities", ["owner"])
    op.create_index("ix_activities_recorded_at", "activities", ["recorded_at"])

    # --- grid_intensity ---
    op.create_table(
        "grid_intensity",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("intensity", sa.Numeric(10, 4), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_grid_intensity_id", "grid_intensity", ["id"])
    op.create_index("ix_grid_intensity_date", "grid_intensity", ["date"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_grid_intensity_date", table_name="grid_intensity")
    op.drop_index("ix_grid_intensity_id", table_name="grid_intensity")
    op.drop_table("grid_intensity")

    op.drop_index("ix_activities_recorded_at", table_name="activities")
    op.drop_index("ix_activities_owner", table_name="activities")
    op.drop_index("ix_activities_id", table_name="activities")
    op.drop_table("activities")

    op.drop_index("ix_profiles_owner", table_name="profiles")
    op.drop_index("ix_profiles_id", table_name="profiles")
    op.drop_table("profiles")

    sa.Enum(name="activity_category_enum").drop(op.get_bind(), checkfirst=True)
