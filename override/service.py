from __future__ import annotations
import logging
from datetime import date, datetime, timezone
from typing import Iterable, Optional, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.database import store_call
from core.errors import ValidationError, NotFoundError
from core.signals import ChangeKind, notify
from member.models import TeamMember
from approval import service as approval
from approval.models import Decision, ExceptionKind
from .models import Override
from .schema import OverrideSubmit

logger = logging.getLogger(__name__)


# -------- helpers --------

def _validate_window(dto: OverrideSubmit) -> None:
    if (dto.start_time is None) ^ (dto.end_time is None):
        raise ValidationError("start_time and end_time must be provided together")
    if dto.start_time is not None and dto.start_time >= dto.end_time:
        raise ValidationError("start_time must be before end_time")


def _date_filters(stmt, start: Optional[date], end: Optional[date]):
    if start is not None:
        stmt = stmt.where(Override.override_date >= start)
    if end is not None:
        stmt = stmt.where(Override.override_date <= end)
    return stmt


# -------- queries --------

@store_call
def get_override(db: Session, override_id: int) -> Override | None:
    return db.get(Override, override_id)


@store_call
def get_overrides(
    db: Session,
    worker_id: int,
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[Override]:
    """A worker's overrides in any status, most recent date first."""
    stmt = select(Override).where(Override.worker_id == worker_id)
    stmt = _date_filters(stmt, start, end)
    stmt = stmt.order_by(Override.override_date.desc())
    return list(db.scalars(stmt))


@store_call
def get_overrides_for_workers(
    db: Session,
    worker_ids: Iterable[int],
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[Override]:
    ids = list(worker_ids)
    if not ids:
        return []
    stmt = select(Override).where(Override.worker_id.in_(ids))
    stmt = _date_filters(stmt, start, end)
    stmt = stmt.order_by(Override.worker_id, Override.override_date)
    return list(db.scalars(stmt))


def list_pending_overrides(db: Session, *, worker_id: Optional[int] = None) -> List[approval.PendingItem]:
    return approval.list_pending(db, ExceptionKind.override, worker_id=worker_id)


# -------- mutations --------

@store_call
def submit_override(db: Session, dto: OverrideSubmit) -> Override:
    """Upsert on (worker_id, override_date).

    A resubmission always goes back to pending and drops the previous admin
    decision, whatever it was.
    """
    _validate_window(dto)
    if db.get(TeamMember, dto.worker_id) is None:
        raise NotFoundError(f"member {dto.worker_id} not found")

    row = db.scalars(
        select(Override).where(
            Override.worker_id == dto.worker_id,
            Override.override_date == dto.override_date,
        )
    ).first()
    if row is None:
        row = Override(worker_id=dto.worker_id, override_date=dto.override_date)
        db.add(row)
    else:
        row.created_at = datetime.now(timezone.utc)

    row.is_available = dto.is_available
    row.start_time = dto.start_time
    row.end_time = dto.end_time
    row.reason = dto.reason
    row.reset_decision()

    db.commit()
    db.refresh(row)
    logger.info(
        "override submitted worker=%s date=%s available=%s", dto.worker_id, dto.override_date, dto.is_available
    )
    notify(ChangeKind.override, dto.worker_id)
    return row


def decide_override(
    db: Session,
    override_id: int,
    decision: Decision | str,
    admin_id: int,
    notes: Optional[str] = None,
) -> Override:
    return approval.decide(db, ExceptionKind.override, override_id, decision, admin_id, notes)
