from __future__ import annotations
from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from authz.deps import require_admin
from override.schema import OverrideSchema
from timeoff.schema import TimeOffRequestSchema

from .models import ExceptionKind
from .schema import DecisionPayload, NotesPayload
from . import service

approval_router = APIRouter(prefix="/approvals", tags=["Approvals"])

_SCHEMAS = {
    ExceptionKind.override: OverrideSchema,
    ExceptionKind.time_off: TimeOffRequestSchema,
}


def _dump(kind: ExceptionKind, row) -> Dict[str, Any]:
    return _SCHEMAS[kind].model_validate(row).model_dump(mode="json")


# Approve or deny a pending exception (admin only)
@approval_router.post("/{kind}/{exception_id}/decision")
def decide_exception(
    kind: ExceptionKind,
    exception_id: int,
    payload: DecisionPayload,
    db: Session = Depends(get_db),
    admin = Depends(require_admin),
) -> Dict[str, Any]:
    row = service.decide(db, kind, exception_id, payload.decision, admin.id, payload.admin_notes)
    return _dump(kind, row)


# Edit admin notes, allowed in any state (admin only)
@approval_router.patch("/{kind}/{exception_id}/notes")
def annotate_exception(
    kind: ExceptionKind,
    exception_id: int,
    payload: NotesPayload,
    db: Session = Depends(get_db),
    _admin = Depends(require_admin),
) -> Dict[str, Any]:
    row = service.annotate(db, kind, exception_id, payload.admin_notes)
    return _dump(kind, row)
