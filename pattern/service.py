from __future__ import annotations
import logging
from datetime import date
from typing import Iterable, Optional, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.config import settings
from core.database import store_call
from core.errors import ValidationError, NotFoundError
from core.signals import ChangeKind, notify
from member.models import TeamMember
from .models import WeeklyPattern
from .presets import QUICK_PATTERNS
from .schema import PatternUpsert

logger = logging.getLogger(__name__)


# -------- helpers --------

def validate_day_of_week(dow: int) -> None:
    if not isinstance(dow, int) or isinstance(dow, bool) or not (0 <= dow <= 6):
        raise ValidationError("day_of_week must be between 0 (Sun) and 6 (Sat)")


def _ensure_member(db: Session, worker_id: int) -> None:
    if db.get(TeamMember, worker_id) is None:
        raise NotFoundError(f"member {worker_id} not found")


# -------- queries --------

@store_call
def list_patterns(db: Session, worker_id: int) -> List[WeeklyPattern]:
    """At most seven rows, ordered by day_of_week."""
    stmt = (
        select(WeeklyPattern)
        .where(WeeklyPattern.worker_id == worker_id)
        .order_by(WeeklyPattern.day_of_week)
    )
    return list(db.scalars(stmt))


@store_call
def get_pattern(db: Session, worker_id: int, dow: int) -> Optional[WeeklyPattern]:
    validate_day_of_week(dow)
    stmt = select(WeeklyPattern).where(
        WeeklyPattern.worker_id == worker_id, WeeklyPattern.day_of_week == dow
    )
    return db.scalars(stmt).first()


@store_call
def get_patterns_for_workers(db: Session, worker_ids: Iterable[int]) -> List[WeeklyPattern]:
    ids = list(worker_ids)
    if not ids:
        return []
    stmt = (
        select(WeeklyPattern)
        .where(WeeklyPattern.worker_id.in_(ids))
        .order_by(WeeklyPattern.worker_id, WeeklyPattern.day_of_week)
    )
    return list(db.scalars(stmt))


# -------- mutations --------

def _apply(row: WeeklyPattern, fields: PatternUpsert) -> None:
    row.is_available = fields.is_available
    row.start_time = fields.start_time
    row.end_time = fields.end_time
    row.max_hours = fields.max_hours or settings.DEFAULT_MAX_HOURS
    row.effective_from = fields.effective_from


@store_call
def upsert_pattern(db: Session, worker_id: int, dow: int, fields: PatternUpsert) -> WeeklyPattern:
    """Create or replace the pattern for (worker_id, dow); one row per key, no approval."""
    validate_day_of_week(dow)
    _ensure_member(db, worker_id)

    row = db.scalars(
        select(WeeklyPattern).where(
            WeeklyPattern.worker_id == worker_id, WeeklyPattern.day_of_week == dow
        )
    ).first()
    if row is None:
        row = WeeklyPattern(worker_id=worker_id, day_of_week=dow)
        db.add(row)
    _apply(row, fields)

    db.commit()
    db.refresh(row)
    logger.info("pattern upserted worker=%s day=%s available=%s", worker_id, dow, row.is_available)
    notify(ChangeKind.pattern, worker_id)
    return row


@store_call
def apply_quick_pattern(
    db: Session,
    worker_id: int,
    preset: str,
    effective_from: Optional[date] = None,
) -> List[WeeklyPattern]:
    quick = QUICK_PATTERNS.get(preset)
    if quick is None:
        raise ValidationError(f"unknown preset {preset!r}")
    _ensure_member(db, worker_id)

    rows = []
    for dow, available, start, end in quick.expand():
        fields = PatternUpsert(
            is_available=available,
            start_time=start,
            end_time=end,
            effective_from=effective_from,
        )
        rows.append(upsert_pattern(db, worker_id, dow, fields))
    return rows
