from __future__ import annotations
from datetime import date, datetime, time
from sqlalchemy import ForeignKey, Time, Integer, Boolean, Date, DateTime, CheckConstraint, UniqueConstraint, true
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func
from core.database import Base


def day_of_week(d: date) -> int:
    """Sunday-based day index (0=Sunday .. 6=Saturday) used by stored patterns."""
    return (d.weekday() + 1) % 7


class WeeklyPattern(Base):
    __tablename__ = "weekly_patterns"

    id: Mapped[int] = mapped_column(primary_key=True)
    worker_id: Mapped[int] = mapped_column(
        ForeignKey("team_members.id", ondelete="CASCADE"), index=True
    )

    # 0=Sunday .. 6=Saturday
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, server_default=true(), nullable=False)

    start_time: Mapped[time | None] = mapped_column(Time(timezone=False), nullable=True)
    end_time:   Mapped[time | None] = mapped_column(Time(timezone=False), nullable=True)
    max_hours: Mapped[int | None] = mapped_column(Integer, nullable=True)
    effective_from: Mapped[date | None] = mapped_column(Date, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    __table_args__ = (
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="day_of_week_range"),
        UniqueConstraint("worker_id", "day_of_week", name="uq_weekly_pattern_worker_day"),
    )
