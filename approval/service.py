"""One approval workflow for every exception kind.

Overrides and time-off requests share the same pending/approved/denied
lifecycle; the functions here take the kind and dispatch to its model.
"""
from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import NamedTuple, Optional, List

from sqlalchemy import select, update
from sqlalchemy.orm import Session

import models_bootstrap  # noqa: F401  registers every exception model
from core.database import store_call
from core.errors import InvalidStateError, NotFoundError, ValidationError
from core.signals import ChangeKind, notify
from member.models import TeamMember
from .models import ApprovalStatus, Decision, ExceptionKind, EXCEPTION_MODELS

logger = logging.getLogger(__name__)

UNKNOWN_MEMBER = "Unknown User"

_CHANGE_KIND = {
    ExceptionKind.override: ChangeKind.override,
    ExceptionKind.time_off: ChangeKind.time_off,
}


class PendingItem(NamedTuple):
    row: object
    worker_name: str


def model_for(kind: ExceptionKind | str):
    try:
        return EXCEPTION_MODELS[ExceptionKind(kind)]
    except (ValueError, KeyError):
        raise ValidationError(f"unknown exception kind {kind!r}")


def _coerce_decision(decision: Decision | str) -> Decision:
    try:
        return Decision(decision)
    except ValueError:
        raise ValidationError("decision must be 'approved' or 'denied'")


# -------- queries --------

@store_call
def get_exception(db: Session, kind: ExceptionKind | str, exception_id: int):
    return db.get(model_for(kind), exception_id)


@store_call
def list_pending(
    db: Session,
    kind: ExceptionKind | str,
    *,
    worker_id: Optional[int] = None,
) -> List[PendingItem]:
    """Pending rows, oldest first, with the requesting member's name.

    worker_id=None is the team-wide admin queue; otherwise the worker's own.
    """
    model = model_for(kind)
    stmt = (
        select(model, TeamMember.name)
        .outerjoin(TeamMember, TeamMember.id == model.worker_id)
        .where(model.status == ApprovalStatus.pending)
    )
    if worker_id is not None:
        stmt = stmt.where(model.worker_id == worker_id)
    stmt = stmt.order_by(model.created_at.asc(), model.id.asc())
    return [PendingItem(row, name or UNKNOWN_MEMBER) for row, name in db.execute(stmt)]


# -------- transitions --------

@store_call
def decide(
    db: Session,
    kind: ExceptionKind | str,
    exception_id: int,
    decision: Decision | str,
    admin_id: int,
    notes: Optional[str] = None,
):
    """pending -> approved | denied, exactly once.

    The status guard is part of the UPDATE, so two concurrent deciders cannot
    both succeed.
    """
    model = model_for(kind)
    outcome = _coerce_decision(decision)

    values = {
        "status": ApprovalStatus(outcome.value),
        "approved_by": admin_id,
        "approved_at": datetime.now(timezone.utc),
    }
    if notes is not None:
        values["admin_notes"] = notes

    result = db.execute(
        update(model)
        .where(model.id == exception_id, model.status == ApprovalStatus.pending)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        row = db.get(model, exception_id)
        if row is None:
            raise NotFoundError(f"{model.exception_kind.value} {exception_id} not found")
        raise InvalidStateError(
            f"{model.exception_kind.value} {exception_id} is already {row.status.value}"
        )
    db.commit()

    row = db.get(model, exception_id)
    db.refresh(row)
    logger.info(
        "%s %s %s by member %s", model.exception_kind.value, exception_id, outcome.value, admin_id
    )
    notify(_CHANGE_KIND[model.exception_kind], row.worker_id)
    return row


@store_call
def annotate(db: Session, kind: ExceptionKind | str, exception_id: int, notes: Optional[str]):
    """Edit admin_notes; the one change allowed after a decision."""
    model = model_for(kind)
    row = db.get(model, exception_id)
    if row is None:
        raise NotFoundError(f"{model.exception_kind.value} {exception_id} not found")
    row.admin_notes = notes
    db.commit()
    db.refresh(row)
    logger.info("%s %s notes updated", model.exception_kind.value, exception_id)
    notify(_CHANGE_KIND[model.exception_kind], row.worker_id)
    return row
