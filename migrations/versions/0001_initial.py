"""initial schema: users, user_plans, teams, team_memberships, goals, goal_updates, personality_summaries

These tables are owned by the platform services that write them; the roster
only reads. This revision exists so a local database matches what the stores expect.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # identities
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("first_name", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("last_name", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("display_name", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("user_title", sa.String(length=255), nullable=True),
        sa.Column("avatar_url", sa.String(length=1024), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_id", "users", ["id"], unique=False)
    op.create_index("ix_users_email", "users", ["email"], unique=False)

    # subscription plan per identity
    op.create_table(
        "user_plans",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("current_plan", sa.String(length=100), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_user_plans_user_id", "user_plans", ["user_id"], unique=False)
    op.create_unique_constraint("uq_user_plans_user_id", "user_plans", ["user_id"])

    # teams and membership
    op.create_table(
        "teams",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_teams_id", "teams", ["id"], unique=False)

    op.create_table(
        "team_memberships",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("team_id", sa.Integer(), sa.ForeignKey("teams.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("role_type", sa.String(length=100), nullable=False, server_default="Individual"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_team_memberships_team_id", "team_memberships", ["team_id"], unique=False)
    op.create_index("ix_team_memberships_user_id", "team_memberships", ["user_id"], unique=False)
    op.create_unique_constraint("uq_team_memberships_team_id_user_id", "team_memberships", ["team_id", "user_id"])

    # goals and their update history
    op.create_table(
        "goals",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("goal_name", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=50), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("progress", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True, server_default=sa.func.now()),
    )
    op.create_index("ix_goals_id", "goals", ["id"], unique=False)
    op.create_index("ix_goals_user_id", "goals", ["user_id"], unique=False)
    op.create_index("ix_goals_status", "goals", ["status"], unique=False)

    op.create_table(
        "goal_updates",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("goal_id", sa.Integer(), sa.ForeignKey("goals.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status_after", sa.String(length=50), nullable=True),
        sa.Column("progress_after", sa.Integer(), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_goal_updates_goal_id", "goal_updates", ["goal_id"], unique=False)
    op.create_index("ix_goal_updates_created_at", "goal_updates", ["created_at"], unique=False)

    # personality dimensions
    op.create_table(
        "personality_summaries",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("trait", sa.String(length=100), nullable=False, server_default=""),
        sa.Column("high_trait_type", sa.String(length=100), nullable=True),
        sa.Column("high_trait_type_value", sa.Integer(), nullable=True),
        sa.Column("low_trait_type", sa.String(length=100), nullable=True),
        sa.Column("low_trait_type_value", sa.Integer(), nullable=True),
        sa.Column("user_primary_trait", sa.String(length=255), nullable=True),
    )
    op.create_index("ix_personality_summaries_user_id", "personality_summaries", ["user_id"], unique=False)


def downgrade():
    op.drop_index("ix_personality_summaries_user_id", table_name="personality_summaries")
    op.drop_table("personality_summaries")
    op.drop_index("ix_goal_updates_created_at", table_name="goal_updates")
    op.drop_index("ix_goal_updates_goal_id", table_name="goal_updates")
    op.drop_table("goal_updates")
    op.drop_index("ix_goals_status", table_name="goals")
    op.drop_index("ix_goals_user_id", table_name="goals")
    op.drop_index("ix_goals_id", table_name="goals")
    op.drop_table("goals")
    op.drop_constraint("uq_team_memberships_team_id_user_id", "team_memberships", type_="unique")
    op.drop_index("ix_team_memberships_user_id", table_name="team_memberships")
    op.drop_index("ix_team_memberships_team_id", table_name="team_memberships")
    op.drop_table("team_memberships")
    op.drop_index("ix_teams_id", table_name="teams")
    op.drop_table("teams")
    op.drop_constraint("uq_user_plans_user_id", "user_plans", type_="unique")
    op.drop_index("ix_user_plans_user_id", table_name="user_plans")
    op.drop_table("user_plans")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_id", table_name="users")
    op.drop_table("users")
