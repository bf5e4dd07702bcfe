"""Initial schema — accounts, user profiles, catalog, teams and roster slots.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _tracked_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_deleted", sa.Boolean, nullable=False, server_default="false"),
    ]


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_by", sa.Integer, sa.ForeignKey("user_profiles.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("updated_by", sa.Integer, sa.ForeignKey("user_profiles.id", ondelete="RESTRICT"), nullable=True),
        sa.Column("deleted_by", sa.Integer, sa.ForeignKey("user_profiles.id", ondelete="RESTRICT"), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_deleted", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "user_profiles",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("account_id", sa.String(36), sa.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, unique=True),
        sa.Column("email", sa.String(254), nullable=False, unique=True),
        sa.Column("display_name", sa.String(50), nullable=True),
        sa.Column("first_name", sa.String(30), nullable=True),
        sa.Column("last_name", sa.String(30), nullable=True),
        sa.Column("avatar_url", sa.String(2048), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "drivers",
        *_tracked_columns(),
        sa.Column("first_name", sa.String(50), nullable=False),
        sa.Column("last_name", sa.String(50), nullable=False),
        sa.Column("abbreviation", sa.String(3), nullable=False, unique=True),
        sa.Column("country_abbreviation", sa.String(3), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
    )

    op.create_table(
        "constructors",
        *_tracked_columns(),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("full_name", sa.String(200), nullable=True),
        sa.Column("country_abbreviation", sa.String(3), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
    )

    op.create_table(
        "teams",
        *_tracked_columns(),
        *_audit_columns(),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("user_profiles.id", ondelete="RESTRICT"), nullable=False, unique=True),
    )

    op.create_table(
        "team_drivers",
        *_tracked_columns(),
        *_audit_columns(),
        sa.Column("team_id", sa.Integer, sa.ForeignKey("teams.id", ondelete="CASCADE"), nullable=False),
        sa.Column("driver_id", sa.Integer, sa.ForeignKey("drivers.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("slot_position", sa.Integer, nullable=False),
        sa.UniqueConstraint("team_id", "slot_position", name="uq_team_drivers_team_slot"),
        sa.UniqueConstraint("team_id", "driver_id", name="uq_team_drivers_team_driver"),
    )

    op.create_table(
        "team_constructors",
        *_tracked_columns(),
        *_audit_columns(),
        sa.Column("team_id", sa.Integer, sa.ForeignKey("teams.id", ondelete="CASCADE"), nullable=False),
        sa.Column("constructor_id", sa.Integer, sa.ForeignKey("constructors.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("slot_position", sa.Integer, nullable=False),
        sa.UniqueConstraint("team_id", "slot_position", name="uq_team_constructors_team_slot"),
        sa.UniqueConstraint("team_id", "constructor_id", name="uq_team_constructors_team_constructor"),
    )


def downgrade() -> None:
    op.drop_table("team_constructors")
    op.drop_table("team_drivers")
    op.drop_table("teams")
    op.drop_table("constructors")
    op.drop_table("drivers")
    op.drop_table("user_profiles")
    op.drop_table("accounts")
