from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, List

from sqlalchemy.orm import Session

from core.config import settings
from core.errors import NotFoundError
from member import service as member_service
from pattern import service as pattern_service
from override import service as override_service
from timeoff import service as timeoff_service
from approval.models import ApprovalStatus
from .engine import AvailabilityStatus, OverridePolicy, TimeWindow, WorkerRecords, resolve

logger = logging.getLogger(__name__)

RECENT_OVERRIDES = 5


def current_policy() -> OverridePolicy:
    return OverridePolicy(settings.AVAILABILITY_OVERRIDE_POLICY)


def load_worker_records(db: Session, worker_id: int, start: date, end: date) -> WorkerRecords:
    """Three store reads; exceptions limited to [start, end]."""
    return WorkerRecords(
        worker_id=worker_id,
        patterns=pattern_service.list_patterns(db, worker_id),
        overrides=override_service.get_overrides(db, worker_id, start=start, end=end),
        time_off=timeoff_service.get_time_off_requests(db, worker_id, start=start, end=end),
    )


def resolve_for_worker(
    db: Session,
    worker_id: int,
    on: date,
    window: Optional[TimeWindow] = None,
    policy: Optional[OverridePolicy] = None,
) -> AvailabilityStatus:
    if member_service.get_member(db, worker_id) is None:
        raise NotFoundError(f"member {worker_id} not found")
    records = load_worker_records(db, worker_id, on, on)
    verdict = resolve(records, on, window, policy or current_policy())
    logger.debug("resolved worker=%s on=%s -> %s/%s", worker_id, on, verdict.status.value, verdict.source.value)
    return verdict


@dataclass
class WorkerSummary:
    worker_id: int
    today: AvailabilityStatus
    pending_requests: int
    pending_overrides: int
    upcoming_time_off: List
    recent_overrides: List


def worker_summary(db: Session, worker_id: int, today: date) -> WorkerSummary:
    """Counts and lists for a worker's own availability dashboard."""
    verdict = resolve_for_worker(db, worker_id, today)
    requests = timeoff_service.get_time_off_requests(db, worker_id)
    overrides = override_service.get_overrides(db, worker_id)
    return WorkerSummary(
        worker_id=worker_id,
        today=verdict,
        pending_requests=sum(1 for r in requests if r.status == ApprovalStatus.pending),
        pending_overrides=sum(1 for o in overrides if o.status == ApprovalStatus.pending),
        upcoming_time_off=timeoff_service.upcoming_time_off(db, worker_id, today),
        recent_overrides=overrides[:RECENT_OVERRIDES],
    )
