"""Initial schema: users, fasting_sessions, food_logs, weight_goals, weight_logs.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("height", sa.Float(), nullable=True),
        sa.Column("gender", sa.String(length=10), nullable=False, server_default="other"),
        sa.Column("activity", sa.String(length=20), nullable=False, server_default="moderate"),
        sa.Column("goal", sa.String(length=10), nullable=False, server_default="maintain"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "fasting_sessions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("ended_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("target_hours", sa.Float(), nullable=False, server_default="16"),
        sa.Column("actual_hours", sa.Float(), nullable=True),
        sa.Column("protocol", sa.String(length=20), nullable=False, server_default="16:8"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="active"),
        sa.Column("feeling", sa.Text(), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_fasting_sessions_user_status", "fasting_sessions", ["user_id", "status"])
    # At most one active fast per user
    op.create_index(
        "uq_fasting_sessions_one_active",
        "fasting_sessions",
        ["user_id"],
        unique=True,
        postgresql_where=sa.text("status = 'active'"),
        sqlite_where=sa.text("status = 'active'"),
    )

    op.create_table(
        "food_logs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("logged_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("log_date", sa.Date(), nullable=False),
        sa.Column("meal_type", sa.String(length=20), nullable=False, server_default="snack"),
        sa.Column("food_name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("calories", sa.Float(), nullable=False, server_default="0"),
        sa.Column("protein", sa.Float(), nullable=False, server_default="0"),
        sa.Column("carbs", sa.Float(), nullable=False, server_default="0"),
        sa.Column("fat", sa.Float(), nullable=False, server_default="0"),
        sa.Column("fiber", sa.Float(), nullable=False, server_default="0"),
        sa.Column("serving_size", sa.String(length=100), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_food_logs_user_date", "food_logs", ["user_id", "log_date"])

    op.create_table(
        "weight_goals",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("start_weight", sa.Float(), nullable=False),
        sa.Column("target_weight", sa.Float(), nullable=False),
        sa.Column("target_date", sa.Date(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_weight_goals_user_created", "weight_goals", ["user_id", "created_at"])

    op.create_table(
        "weight_logs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("logged_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_weight_logs_user_logged", "weight_logs", ["user_id", "logged_at"])


def downgrade() -> None:
    op.drop_index("ix_weight_logs_user_logged", table_name="weight_logs")
    op.drop_table("weight_logs")
    op.drop_index("ix_weight_goals_user_created", table_name="weight_goals")
    op.drop_table("weight_goals")
    op.drop_index("ix_food_logs_user_date", table_name="food_logs")
    op.drop_table("food_logs")
    op.drop_index("uq_fasting_sessions_one_active", table_name="fasting_sessions")
    op.drop_index("ix_fasting_sessions_user_status", table_name="fasting_sessions")
    op.drop_table("fasting_sessions")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
