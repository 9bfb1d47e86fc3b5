from __future__ import annotations
from datetime import date, time
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.database import get_db
from authz.deps import get_current_member, require_admin
from member.schema import TeamMemberSchema
from resolution.engine import TimeWindow

from .schema import TeamSnapshotSchema
from . import service

team_router = APIRouter(prefix="/team", tags=["Team Availability"])


@team_router.get("/snapshot", response_model=TeamSnapshotSchema)
def day_snapshot(
    on: Optional[date] = Query(None, description="defaults to today"),
    db: Session = Depends(get_db),
    member = Depends(get_current_member),
):
    snap = service.team_snapshot(db, on or date.today())
    return TeamSnapshotSchema.model_validate(snap)


@team_router.get("/week", response_model=list[TeamSnapshotSchema])
def week_snapshot(
    anchor: Optional[date] = Query(None, description="any day of the week, defaults to today"),
    db: Session = Depends(get_db),
    member = Depends(get_current_member),
):
    return [TeamSnapshotSchema.model_validate(s) for s in service.team_week(db, anchor or date.today())]


# Candidates for a schedule slot (admin only)
@team_router.get("/available", response_model=list[TeamMemberSchema])
def available_workers(
    on: date = Query(...),
    start: Optional[time] = Query(None),
    end: Optional[time] = Query(None),
    db: Session = Depends(get_db),
    _admin = Depends(require_admin),
):
    return service.available_workers(db, on, TimeWindow.from_bounds(start, end))
