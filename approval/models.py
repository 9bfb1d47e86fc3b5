from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import ClassVar

from sqlalchemy import DateTime, ForeignKey, Text, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func


class ApprovalStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    denied = "denied"


class Decision(str, Enum):
    approved = "approved"
    denied = "denied"


class ExceptionKind(str, Enum):
    override = "override"
    time_off = "time_off"


# kind -> mapped class, filled as ApprovalMixin subclasses are declared
EXCEPTION_MODELS: dict[ExceptionKind, type] = {}


class ApprovalMixin:
    """Columns shared by every admin-approvable exception row.

    pending --decide--> approved | denied; both outcomes are terminal.
    """

    exception_kind: ClassVar[ExceptionKind]

    status: Mapped[ApprovalStatus] = mapped_column(
        SAEnum(ApprovalStatus, name="approval_status"),
        default=ApprovalStatus.pending,
        nullable=False,
        index=True,
    )
    admin_notes: Mapped[str | None] = mapped_column(Text(), nullable=True)
    # decision actor and time, set for denials too
    approved_by: Mapped[int | None] = mapped_column(
        ForeignKey("team_members.id", ondelete="SET NULL"), nullable=True
    )
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        kind = cls.__dict__.get("exception_kind")
        if kind is not None:
            EXCEPTION_MODELS[kind] = cls

    def reset_decision(self) -> None:
        self.status = ApprovalStatus.pending
        self.admin_notes = None
        self.approved_by = None
        self.approved_at = None
