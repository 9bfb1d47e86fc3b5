from __future__ import annotations
import logging
from datetime import date
from typing import Iterable, Optional, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.database import store_call
from core.errors import ValidationError, NotFoundError
from core.signals import ChangeKind, notify
from member.models import TeamMember
from approval import service as approval
from approval.models import ApprovalStatus, Decision, ExceptionKind
from .models import TimeOffRequest, TimeOffType
from .schema import TimeOffRequestCreate

logger = logging.getLogger(__name__)


# -------- helpers --------

def days_requested(start: date, end: date) -> int:
    """Inclusive day count."""
    return (end - start).days + 1


def _validate(dto: TimeOffRequestCreate) -> TimeOffType:
    if dto.end_date < dto.start_date:
        raise ValidationError("end_date must be on or after start_date")
    try:
        return TimeOffType(dto.request_type)
    except ValueError:
        raise ValidationError(f"unknown request type {dto.request_type!r}")


def _overlap_filters(stmt, start: Optional[date], end: Optional[date]):
    # overlap if (start_date <= end) AND (end_date >= start)
    if end is not None:
        stmt = stmt.where(TimeOffRequest.start_date <= end)
    if start is not None:
        stmt = stmt.where(TimeOffRequest.end_date >= start)
    return stmt


# -------- queries --------

@store_call
def get_time_off_request(db: Session, request_id: int) -> TimeOffRequest | None:
    return db.get(TimeOffRequest, request_id)


@store_call
def get_time_off_requests(
    db: Session,
    worker_id: int,
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[TimeOffRequest]:
    """A worker's requests in any status overlapping [start, end], newest first."""
    stmt = select(TimeOffRequest).where(TimeOffRequest.worker_id == worker_id)
    stmt = _overlap_filters(stmt, start, end)
    stmt = stmt.order_by(TimeOffRequest.created_at.desc(), TimeOffRequest.id.desc())
    return list(db.scalars(stmt))


@store_call
def get_time_off_for_workers(
    db: Session,
    worker_ids: Iterable[int],
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[TimeOffRequest]:
    ids = list(worker_ids)
    if not ids:
        return []
    stmt = select(TimeOffRequest).where(TimeOffRequest.worker_id.in_(ids))
    stmt = _overlap_filters(stmt, start, end)
    stmt = stmt.order_by(TimeOffRequest.worker_id, TimeOffRequest.start_date)
    return list(db.scalars(stmt))


@store_call
def upcoming_time_off(db: Session, worker_id: int, today: date) -> List[TimeOffRequest]:
    """Approved requests starting after today."""
    stmt = (
        select(TimeOffRequest)
        .where(
            TimeOffRequest.worker_id == worker_id,
            TimeOffRequest.status == ApprovalStatus.approved,
            TimeOffRequest.start_date > today,
        )
        .order_by(TimeOffRequest.start_date.asc())
    )
    return list(db.scalars(stmt))


def list_pending_time_off(db: Session, *, worker_id: Optional[int] = None) -> List[approval.PendingItem]:
    return approval.list_pending(db, ExceptionKind.time_off, worker_id=worker_id)


# -------- mutations --------

@store_call
def create_time_off_request(db: Session, dto: TimeOffRequestCreate) -> TimeOffRequest:
    """Insert a new pending request. Overlapping or duplicate ranges are allowed."""
    request_type = _validate(dto)
    if db.get(TeamMember, dto.worker_id) is None:
        raise NotFoundError(f"member {dto.worker_id} not found")

    row = TimeOffRequest(
        worker_id=dto.worker_id,
        start_date=dto.start_date,
        end_date=dto.end_date,
        request_type=request_type,
        reason=dto.reason,
        days_requested=days_requested(dto.start_date, dto.end_date),
        status=ApprovalStatus.pending,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info(
        "time off requested worker=%s %s..%s (%s days)",
        dto.worker_id, dto.start_date, dto.end_date, row.days_requested,
    )
    notify(ChangeKind.time_off, dto.worker_id)
    return row


def decide_time_off_request(
    db: Session,
    request_id: int,
    decision: Decision | str,
    admin_id: int,
    notes: Optional[str] = None,
) -> TimeOffRequest:
    return approval.decide(db, ExceptionKind.time_off, request_id, decision, admin_id, notes)
