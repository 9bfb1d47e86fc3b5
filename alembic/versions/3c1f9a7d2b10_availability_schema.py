"""availability schema: members, weekly patterns, overrides, time off

Revision ID: 3c1f9a7d2b10
Revises:
Create Date: 2025-03-03 09:12:41.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1f9a7d2b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

member_role = sa.Enum("worker", "manager", "admin", name="member_role")
approval_status = sa.Enum("pending", "approved", "denied", name="approval_status")
time_off_type = sa.Enum("vacation", "sick_leave", "personal", "unpaid", name="time_off_type")


def _approval_columns() -> list:
    return [
        sa.Column("status", approval_status, nullable=False),
        sa.Column("admin_notes", sa.Text(), nullable=True),
        sa.Column("approved_by", sa.Integer(), sa.ForeignKey("team_members.id", ondelete="SET NULL"), nullable=True),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "team_members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("role", member_role, nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("avatar_url", sa.String(512), nullable=True),
        sa.Column("phone", sa.String(32), nullable=True),
    )
    op.create_index("ix_team_members_role", "team_members", ["role"])

    op.create_table(
        "weekly_patterns",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("worker_id", sa.Integer(), sa.ForeignKey("team_members.id", ondelete="CASCADE"), nullable=False),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("is_available", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=True),
        sa.Column("end_time", sa.Time(), nullable=True),
        sa.Column("max_hours", sa.Integer(), nullable=True),
        sa.Column("effective_from", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_weekly_patterns_day_of_week_range"),
        sa.UniqueConstraint("worker_id", "day_of_week", name="uq_weekly_pattern_worker_day"),
    )
    op.create_index("ix_weekly_patterns_worker_id", "weekly_patterns", ["worker_id"])

    op.create_table(
        "availability_overrides",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("worker_id", sa.Integer(), sa.ForeignKey("team_members.id", ondelete="CASCADE"), nullable=False),
        sa.Column("override_date", sa.Date(), nullable=False),
        sa.Column("is_available", sa.Boolean(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=True),
        sa.Column("end_time", sa.Time(), nullable=True),
        sa.Column("reason", sa.String(500), nullable=True),
        *_approval_columns(),
        sa.UniqueConstraint("worker_id", "override_date", name="uq_override_worker_date"),
    )
    op.create_index("ix_availability_overrides_worker_id", "availability_overrides", ["worker_id"])
    op.create_index("ix_availability_overrides_status", "availability_overrides", ["status"])
    op.create_index("ix_override_date", "availability_overrides", ["override_date"])

    op.create_table(
        "time_off_requests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("worker_id", sa.Integer(), sa.ForeignKey("team_members.id", ondelete="CASCADE"), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("request_type", time_off_type, nullable=False),
        sa.Column("reason", sa.String(500), nullable=True),
        sa.Column("days_requested", sa.Integer(), nullable=False),
        *_approval_columns(),
        sa.CheckConstraint("start_date <= end_date", name="ck_time_off_requests_time_off_range"),
    )
    op.create_index("ix_time_off_requests_worker_id", "time_off_requests", ["worker_id"])
    op.create_index("ix_time_off_requests_status", "time_off_requests", ["status"])
    op.create_index("ix_time_off_worker_range", "time_off_requests", ["worker_id", "start_date", "end_date"])


def downgrade() -> None:
    op.drop_table("time_off_requests")
    op.drop_table("availability_overrides")
    op.drop_table("weekly_patterns")
    op.drop_table("team_members")
    time_off_type.drop(op.get_bind(), checkfirst=True)
    approval_status.drop(op.get_bind(), checkfirst=True)
    member_role.drop(op.get_bind(), checkfirst=True)
