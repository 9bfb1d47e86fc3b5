from __future__ import annotations
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from core.database import get_db
from authz.deps import get_current_member, ensure_self_or_admin

from .schema import TimeOffRequestSchema, PendingTimeOffSchema, TimeOffRequestPayload, TimeOffRequestCreate
from . import service

timeoff_router = APIRouter(prefix="/time-off", tags=["Time Off"])

# List a worker's requests (defaults to the caller), optional overlap window
@timeoff_router.get("", response_model=list[TimeOffRequestSchema])
def list_time_off(
    worker_id: Optional[int] = Query(None),
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    member = Depends(get_current_member),
):
    target = worker_id if worker_id is not None else member.id
    ensure_self_or_admin(member, target)
    return service.get_time_off_requests(db, target, start=start, end=end)

# Pending queue: team-wide for admins, own rows for workers
@timeoff_router.get("/pending", response_model=list[PendingTimeOffSchema])
def list_pending(
    db: Session = Depends(get_db),
    member = Depends(get_current_member),
):
    scope = None if member.is_admin else member.id
    return [
        PendingTimeOffSchema(**TimeOffRequestSchema.model_validate(p.row).model_dump(), worker_name=p.worker_name)
        for p in service.list_pending_time_off(db, worker_id=scope)
    ]

@timeoff_router.get("/{request_id}", response_model=TimeOffRequestSchema)
def get_time_off(
    request_id: int,
    db: Session = Depends(get_db),
    member = Depends(get_current_member),
):
    obj = service.get_time_off_request(db, request_id)
    if not obj:
        raise HTTPException(status_code=404, detail="time off request not found")
    ensure_self_or_admin(member, obj.worker_id)
    return obj

# Submit a new request (always pending)
@timeoff_router.post("", response_model=TimeOffRequestSchema, status_code=status.HTTP_201_CREATED)
def create_time_off(
    payload: TimeOffRequestPayload,
    db: Session = Depends(get_db),
    member = Depends(get_current_member),
):
    data = payload.model_dump()
    data["worker_id"] = payload.worker_id if payload.worker_id is not None else member.id
    ensure_self_or_admin(member, data["worker_id"])
    return service.create_time_off_request(db, TimeOffRequestCreate(**data))
