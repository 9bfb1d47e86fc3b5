from __future__ import annotations
from datetime import date
from enum import Enum
from sqlalchemy import ForeignKey, Date, Integer, String, CheckConstraint, Index, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column
from core.database import Base
from approval.models import ApprovalMixin, ExceptionKind


class TimeOffType(str, Enum):
    vacation = "vacation"
    sick_leave = "sick_leave"
    personal = "personal"
    unpaid = "unpaid"


class TimeOffRequest(ApprovalMixin, Base):
    __tablename__ = "time_off_requests"
    exception_kind = ExceptionKind.time_off

    id: Mapped[int] = mapped_column(primary_key=True)
    worker_id: Mapped[int] = mapped_column(
        ForeignKey("team_members.id", ondelete="CASCADE"), index=True
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date:   Mapped[date] = mapped_column(Date, nullable=False)
    request_type: Mapped[TimeOffType] = mapped_column(
        SAEnum(TimeOffType, name="time_off_type"), nullable=False
    )
    reason: Mapped[str | None] = mapped_column(String(500), nullable=True)
    days_requested: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint("start_date <= end_date", name="time_off_range"),
        Index("ix_time_off_worker_range", "worker_id", "start_date", "end_date"),
    )
