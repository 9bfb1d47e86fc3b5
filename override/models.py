from __future__ import annotations
from datetime import date, time
from sqlalchemy import ForeignKey, Time, Date, Boolean, String, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column
from core.database import Base
from approval.models import ApprovalMixin, ExceptionKind


class Override(ApprovalMixin, Base):
    __tablename__ = "availability_overrides"
    exception_kind = ExceptionKind.override

    id: Mapped[int] = mapped_column(primary_key=True)
    worker_id: Mapped[int] = mapped_column(
        ForeignKey("team_members.id", ondelete="CASCADE"), index=True
    )
    override_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False)

    # both absent => all day
    start_time: Mapped[time | None] = mapped_column(Time(timezone=False), nullable=True)
    end_time:   Mapped[time | None] = mapped_column(Time(timezone=False), nullable=True)
    reason: Mapped[str | None] = mapped_column(String(500), nullable=True)

    __table_args__ = (
        UniqueConstraint("worker_id", "override_date", name="uq_override_worker_date"),
        Index("ix_override_date", "override_date"),
    )

    @property
    def is_all_day(self) -> bool:
        return self.start_time is None or self.end_time is None
