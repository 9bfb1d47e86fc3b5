from __future__ import annotations
import logging
from datetime import date
from typing import Optional, List

from sqlalchemy.orm import Session

from member import service as member_service
from member.models import TeamMember
from pattern import service as pattern_service
from override import service as override_service
from timeoff import service as timeoff_service
from resolution.engine import OverridePolicy, TimeWindow
from resolution.service import current_policy
from . import aggregator
from .aggregator import TeamRecords, TeamSnapshot

logger = logging.getLogger(__name__)


def load_team_records(db: Session, start: date, end: date) -> TeamRecords:
    """One read per table for the whole team over [start, end]."""
    members = member_service.list_team_members(db)
    ids = [m.id for m in members]
    return TeamRecords.build(
        members,
        patterns=pattern_service.get_patterns_for_workers(db, ids),
        overrides=override_service.get_overrides_for_workers(db, ids, start=start, end=end),
        time_off=timeoff_service.get_time_off_for_workers(db, ids, start=start, end=end),
    )


def team_snapshot(db: Session, on: date, policy: Optional[OverridePolicy] = None) -> TeamSnapshot:
    team = load_team_records(db, on, on)
    snap = aggregator.snapshot(team, on, policy or current_policy())
    logger.debug(
        "snapshot %s: %d/%d available, %d time off, %d unavailable",
        on, snap.available_count, snap.total_workers, snap.time_off_count, snap.unavailable_count,
    )
    return snap


def team_week(db: Session, anchor: date, policy: Optional[OverridePolicy] = None) -> List[TeamSnapshot]:
    days = aggregator.week_dates(anchor)
    team = load_team_records(db, days[0], days[-1])
    return aggregator.week_snapshot(team, anchor, policy or current_policy())


def available_workers(
    db: Session,
    on: date,
    window: Optional[TimeWindow] = None,
    policy: Optional[OverridePolicy] = None,
) -> List[TeamMember]:
    team = load_team_records(db, on, on)
    return aggregator.available_workers_for(team, on, window, policy or current_policy())
