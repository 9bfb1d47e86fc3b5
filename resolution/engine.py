"""Availability resolution.

For one worker and one date the verdict comes from the first tier that has
matching data:

    1. approved time off covering the date
    2. an override for the exact date
    3. the weekly pattern for the date's day of week
    4. default: available

An optional time window is checked against the winning tier's bounds and can
only turn an "available" verdict into "unavailable"; it is not a tier.

Everything here is pure: callers load the rows (ORM objects or anything with
the same attributes) and pass them in.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, time
from enum import Enum
from typing import Optional, Sequence

from core.errors import ValidationError
from approval.models import ApprovalStatus
from pattern.models import day_of_week


class Status(str, Enum):
    available = "available"
    unavailable = "unavailable"
    time_off = "time_off"


class Source(str, Enum):
    override = "override"
    time_off = "time_off"
    pattern = "pattern"
    default = "default"


class OverridePolicy(str, Enum):
    # only approved overrides count
    approved_only = "approved_only"
    # an override in any status counts (per-worker calendar display of the old client)
    any_status = "any_status"


ALL_DAY = "all day"
NOT_AVAILABLE = "not available"
DEFAULT_DETAIL = "available (default)"


@dataclass(frozen=True)
class TimeWindow:
    start: time
    end: time

    def __post_init__(self):
        if self.start >= self.end:
            raise ValidationError("window start must be before window end")

    @classmethod
    def from_bounds(cls, start: Optional[time], end: Optional[time]) -> Optional["TimeWindow"]:
        if start is None and end is None:
            return None
        if start is None or end is None:
            raise ValidationError("window start and end must be given together")
        return cls(start, end)

    def within(self, lo: time, hi: time) -> bool:
        return lo <= self.start and self.end <= hi


@dataclass(frozen=True)
class AvailabilityStatus:
    status: Status
    source: Source
    detail: str

    @property
    def is_available(self) -> bool:
        return self.status == Status.available

    @property
    def calendar_state(self) -> Status:
        """Three-way state for calendar cells: time off is shown apart from other unavailability."""
        if self.source == Source.time_off:
            return Status.time_off
        return self.status


@dataclass
class WorkerRecords:
    """Read snapshot of one worker's availability rows."""
    worker_id: int
    patterns: Sequence = field(default_factory=tuple)
    overrides: Sequence = field(default_factory=tuple)
    time_off: Sequence = field(default_factory=tuple)


def format_window(start: Optional[time], end: Optional[time]) -> str:
    if start is None or end is None:
        return ALL_DAY
    return f"{start.strftime('%H:%M')}-{end.strftime('%H:%M')}"


def _value(v) -> str:
    return getattr(v, "value", v)


def _is_approved(row) -> bool:
    return _value(row.status) == ApprovalStatus.approved.value


def approved_time_off_on(records: WorkerRecords, on: date):
    for req in records.time_off:
        if _is_approved(req) and req.start_date <= on <= req.end_date:
            return req
    return None


def override_on(records: WorkerRecords, on: date, policy: OverridePolicy = OverridePolicy.approved_only):
    for ov in records.overrides:
        if ov.override_date != on:
            continue
        if policy == OverridePolicy.approved_only and not _is_approved(ov):
            continue
        return ov
    return None


def pattern_for(records: WorkerRecords, on: date):
    dow = day_of_week(on)
    for p in records.patterns:
        if p.day_of_week == dow:
            return p
    return None


def _bounded(verdict: AvailabilityStatus, bounds, window: Optional[TimeWindow]) -> AvailabilityStatus:
    if window is None or bounds is None or not verdict.is_available:
        return verdict
    lo, hi = bounds
    if window.within(lo, hi):
        return verdict
    return AvailabilityStatus(Status.unavailable, verdict.source, f"outside {format_window(lo, hi)}")


def resolve(
    records: WorkerRecords,
    on: date,
    window: Optional[TimeWindow] = None,
    policy: OverridePolicy = OverridePolicy.approved_only,
) -> AvailabilityStatus:
    req = approved_time_off_on(records, on)
    if req is not None:
        return AvailabilityStatus(Status.unavailable, Source.time_off, _value(req.request_type))

    ov = override_on(records, on, policy)
    if ov is not None:
        has_times = ov.start_time is not None and ov.end_time is not None
        verdict = AvailabilityStatus(
            Status.available if ov.is_available else Status.unavailable,
            Source.override,
            format_window(ov.start_time, ov.end_time),
        )
        return _bounded(verdict, (ov.start_time, ov.end_time) if has_times else None, window)

    p = pattern_for(records, on)
    if p is not None:
        if not p.is_available:
            # times on an unavailable day are ignored
            return AvailabilityStatus(Status.unavailable, Source.pattern, NOT_AVAILABLE)
        has_times = p.start_time is not None and p.end_time is not None
        verdict = AvailabilityStatus(Status.available, Source.pattern, format_window(p.start_time, p.end_time))
        return _bounded(verdict, (p.start_time, p.end_time) if has_times else None, window)

    return AvailabilityStatus(Status.available, Source.default, DEFAULT_DETAIL)
