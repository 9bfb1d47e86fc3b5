"""Team-wide folds over per-worker resolution.

Counting rule for a day (kept from the team overview screen):

    available_count = total_workers - time_off_count - unavailable_count

where time_off_count counts workers on approved time off and unavailable_count
counts the remaining workers holding an *approved* unavailable override for the
day. Workers marked unavailable only by their weekly pattern stay in
available_count; their own cell in `members` still shows the resolved status.
"""
from __future__ import annotations
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from pattern.models import day_of_week
from resolution.engine import (
    AvailabilityStatus,
    OverridePolicy,
    Status,
    TimeWindow,
    WorkerRecords,
    approved_time_off_on,
    override_on,
    resolve,
)


@dataclass(frozen=True)
class WorkerDayStatus:
    worker_id: int
    name: str
    on: date
    availability: AvailabilityStatus


@dataclass
class TeamSnapshot:
    on: date
    total_workers: int
    available_count: int
    unavailable_count: int
    time_off_count: int
    override_count: int
    members: List[WorkerDayStatus] = field(default_factory=list)


@dataclass
class TeamRecords:
    """Members plus every availability row needed for a date range."""
    members: Sequence
    records: Dict[int, WorkerRecords]

    @classmethod
    def build(cls, members: Sequence, patterns=(), overrides=(), time_off=()) -> "TeamRecords":
        grouped: Dict[int, Dict[str, list]] = defaultdict(lambda: {"patterns": [], "overrides": [], "time_off": []})
        for p in patterns:
            grouped[p.worker_id]["patterns"].append(p)
        for o in overrides:
            grouped[o.worker_id]["overrides"].append(o)
        for t in time_off:
            grouped[t.worker_id]["time_off"].append(t)
        records = {
            m.id: WorkerRecords(worker_id=m.id, **grouped.get(m.id, {}))
            for m in members
        }
        return cls(members=list(members), records=records)

    def for_worker(self, worker_id: int) -> WorkerRecords:
        return self.records.get(worker_id) or WorkerRecords(worker_id=worker_id)


def week_start(anchor: date) -> date:
    """Sunday on or before anchor."""
    return anchor - timedelta(days=day_of_week(anchor))


def week_dates(anchor: date) -> List[date]:
    start = week_start(anchor)
    return [start + timedelta(days=i) for i in range(7)]


def snapshot(
    team: TeamRecords,
    on: date,
    policy: OverridePolicy = OverridePolicy.approved_only,
) -> TeamSnapshot:
    cells: List[WorkerDayStatus] = []
    time_off_count = 0
    unavailable_count = 0
    override_count = 0

    for m in team.members:
        records = team.for_worker(m.id)
        verdict = resolve(records, on, policy=policy)
        cells.append(WorkerDayStatus(m.id, m.name, on, verdict))

        override_count += sum(1 for o in records.overrides if o.override_date == on)
        if approved_time_off_on(records, on) is not None:
            time_off_count += 1
            continue
        ov = override_on(records, on, OverridePolicy.approved_only)
        if ov is not None and not ov.is_available:
            unavailable_count += 1

    total = len(team.members)
    return TeamSnapshot(
        on=on,
        total_workers=total,
        available_count=total - time_off_count - unavailable_count,
        unavailable_count=unavailable_count,
        time_off_count=time_off_count,
        override_count=override_count,
        members=cells,
    )


def week_snapshot(
    team: TeamRecords,
    anchor: date,
    policy: OverridePolicy = OverridePolicy.approved_only,
) -> List[TeamSnapshot]:
    return [snapshot(team, d, policy) for d in week_dates(anchor)]


def available_workers_for(
    team: TeamRecords,
    on: date,
    window: Optional[TimeWindow] = None,
    policy: OverridePolicy = OverridePolicy.approved_only,
) -> List:
    """Members whose resolved status is available; no double-booking checks."""
    return [
        m for m in team.members
        if resolve(team.for_worker(m.id), on, window, policy).status == Status.available
    ]
