from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from authz.deps import get_current_member, ensure_self_or_admin

from .schema import WeeklyPatternSchema, PatternUpsert, QuickPatternPayload
from . import service

pattern_router = APIRouter(prefix="/patterns", tags=["Weekly Patterns"])


@pattern_router.get("/{worker_id}", response_model=list[WeeklyPatternSchema])
def list_patterns(
    worker_id: int,
    db: Session = Depends(get_db),
    member = Depends(get_current_member),
    ):
    return service.list_patterns(db, worker_id)


# Upsert one day (worker for themselves, or an admin on their behalf)
@pattern_router.put("/{worker_id}/{day_of_week}", response_model=WeeklyPatternSchema)
def upsert_pattern(
    worker_id: int,
    day_of_week: int,
    payload: PatternUpsert,
    db: Session = Depends(get_db),
    member = Depends(get_current_member),
    ):
    ensure_self_or_admin(member, worker_id)
    try:
        return service.upsert_pattern(db, worker_id, day_of_week, payload)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="pattern was changed concurrently, retry")


@pattern_router.post("/{worker_id}/quick", response_model=list[WeeklyPatternSchema])
def apply_quick_pattern(
    worker_id: int,
    payload: QuickPatternPayload,
    db: Session = Depends(get_db),
    member = Depends(get_current_member),
    ):
    ensure_self_or_admin(member, worker_id)
    try:
        return service.apply_quick_pattern(db, worker_id, payload.preset, payload.effective_from)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="pattern was changed concurrently, retry")
