from __future__ import annotations
from datetime import date, time
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.database import get_db
from authz.deps import get_current_member, ensure_self_or_admin

from .engine import TimeWindow
from .schema import WorkerAvailabilitySchema, WorkerSummarySchema
from . import service

availability_router = APIRouter(prefix="/availability", tags=["Availability"])


@availability_router.get("/{worker_id}", response_model=WorkerAvailabilitySchema)
def resolve_availability(
    worker_id: int,
    on: date = Query(..., description="YYYY-MM-DD"),
    start: Optional[time] = Query(None, description="window start HH:MM"),
    end: Optional[time] = Query(None, description="window end HH:MM"),
    db: Session = Depends(get_db),
    member = Depends(get_current_member),
):
    verdict = service.resolve_for_worker(db, worker_id, on, TimeWindow.from_bounds(start, end))
    return WorkerAvailabilitySchema(
        worker_id=worker_id,
        on=on,
        status=verdict.status,
        source=verdict.source,
        detail=verdict.detail,
        calendar_state=verdict.calendar_state,
    )


@availability_router.get("/{worker_id}/summary", response_model=WorkerSummarySchema)
def availability_summary(
    worker_id: int,
    today: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    member = Depends(get_current_member),
):
    ensure_self_or_admin(member, worker_id)
    summary = service.worker_summary(db, worker_id, today or date.today())
    return WorkerSummarySchema.model_validate(summary)
