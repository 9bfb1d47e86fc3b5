from __future__ import annotations
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from authz.deps import get_current_member, ensure_self_or_admin

from .schema import OverrideSchema, PendingOverrideSchema, OverrideSubmitPayload, OverrideSubmit
from . import service

override_router = APIRouter(prefix="/overrides", tags=["Availability Overrides"])

# List a worker's overrides (defaults to the caller), optional date window
@override_router.get("", response_model=list[OverrideSchema])
def list_overrides(
    worker_id: Optional[int] = Query(None),
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    member = Depends(get_current_member),
):
    target = worker_id if worker_id is not None else member.id
    ensure_self_or_admin(member, target)
    return service.get_overrides(db, target, start=start, end=end)

# Pending queue: team-wide for admins, own rows for workers
@override_router.get("/pending", response_model=list[PendingOverrideSchema])
def list_pending(
    db: Session = Depends(get_db),
    member = Depends(get_current_member),
):
    scope = None if member.is_admin else member.id
    return [
        PendingOverrideSchema(**OverrideSchema.model_validate(p.row).model_dump(), worker_name=p.worker_name)
        for p in service.list_pending_overrides(db, worker_id=scope)
    ]

@override_router.get("/{override_id}", response_model=OverrideSchema)
def get_override(
    override_id: int,
    db: Session = Depends(get_db),
    member = Depends(get_current_member),
):
    obj = service.get_override(db, override_id)
    if not obj:
        raise HTTPException(status_code=404, detail="override not found")
    ensure_self_or_admin(member, obj.worker_id)
    return obj

# Submit (upsert on worker + date, always back to pending)
@override_router.post("", response_model=OverrideSchema, status_code=status.HTTP_201_CREATED)
def submit_override(
    payload: OverrideSubmitPayload,
    db: Session = Depends(get_db),
    member = Depends(get_current_member),
):
    data = payload.model_dump()
    data["worker_id"] = payload.worker_id if payload.worker_id is not None else member.id
    ensure_self_or_admin(member, data["worker_id"])
    try:
        return service.submit_override(db, OverrideSubmit(**data))
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="override for this date was changed concurrently, retry")
