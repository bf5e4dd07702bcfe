"""Leagues, league memberships and league invites.

Revision ID: 002_leagues
Revises: 001_initial
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002_leagues"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_deleted", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("created_by", sa.Integer, sa.ForeignKey("user_profiles.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("updated_by", sa.Integer, sa.ForeignKey("user_profiles.id", ondelete="RESTRICT"), nullable=True),
        sa.Column("deleted_by", sa.Integer, sa.ForeignKey("user_profiles.id", ondelete="RESTRICT"), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "leagues",
        *_base_columns(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("owner_id", sa.Integer, sa.ForeignKey("user_profiles.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("max_teams", sa.Integer, nullable=False, server_default="15"),
        sa.Column("is_private", sa.Boolean, nullable=False, server_default="false"),
    )
    op.create_index("ix_leagues_owner_id", "leagues", ["owner_id"])

    op.create_table(
        "league_teams",
        *_base_columns(),
        sa.Column("league_id", sa.Integer, sa.ForeignKey("leagues.id", ondelete="CASCADE"), nullable=False),
        sa.Column("team_id", sa.Integer, sa.ForeignKey("teams.id", ondelete="CASCADE"), nullable=False),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("league_id", "team_id", name="uq_league_teams_league_team"),
    )

    op.create_table(
        "league_invites",
        *_base_columns(),
        sa.Column("league_id", sa.Integer, sa.ForeignKey("leagues.id", ondelete="CASCADE"), nullable=False, unique=True),
        sa.Column("token", sa.String(512), nullable=False, unique=True),
    )


def downgrade() -> None:
    op.drop_table("league_invites")
    op.drop_table("league_teams")
    op.drop_index("ix_leagues_owner_id", table_name="leagues")
    op.drop_table("leagues")
