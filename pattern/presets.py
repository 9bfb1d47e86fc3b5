"""Named weekly presets offered by the availability settings screen.

A preset is not stored; applying one expands to seven day upserts.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import time

SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)
WEEKDAYS = frozenset({MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY})
WEEKEND = frozenset({SATURDAY, SUNDAY})


@dataclass(frozen=True)
class QuickPattern:
    name: str
    available_days: frozenset[int]
    start_time: time
    end_time: time

    def expand(self) -> list[tuple[int, bool, time, time]]:
        """(day_of_week, is_available, start, end) for all seven days, Sunday first."""
        return [
            (day, day in self.available_days, self.start_time, self.end_time)
            for day in range(7)
        ]


FULL_TIME = QuickPattern("full-time", WEEKDAYS, time(9, 0), time(17, 0))
PART_TIME = QuickPattern("part-time", WEEKDAYS, time(9, 0), time(13, 0))
WEEKENDS_ONLY = QuickPattern("weekends-only", WEEKEND, time(10, 0), time(18, 0))

QUICK_PATTERNS: dict[str, QuickPattern] = {
    p.name: p for p in (FULL_TIME, PART_TIME, WEEKENDS_ONLY)
}
