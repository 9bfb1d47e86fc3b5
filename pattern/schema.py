from __future__ import annotations
from datetime import date, time
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .presets import QUICK_PATTERNS


# ---------- DB → API (read) ----------
class WeeklyPatternSchema(BaseModel):
    id: int
    worker_id: int
    day_of_week: int
    is_available: bool
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    max_hours: Optional[int] = None
    effective_from: Optional[date] = None
    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode="after")
    def hide_times_when_unavailable(self):
        if not self.is_available:
            self.start_time = None
            self.end_time = None
        return self


# ---------- Client → API (upsert one day) ----------
class PatternUpsert(BaseModel):
    is_available: bool = True
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    max_hours: Optional[int] = Field(None, ge=1, le=24)
    effective_from: Optional[date] = None
    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def validate_times(self):
        if (self.start_time is None) ^ (self.end_time is None):
            raise ValueError("start time and end time must be provided together")
        if self.start_time and self.end_time and self.start_time >= self.end_time:
            raise ValueError("start time must be before end time")
        return self


# ---------- Client → API (quick preset) ----------
class QuickPatternPayload(BaseModel):
    preset: str = Field(..., description="full-time | part-time | weekends-only")
    effective_from: Optional[date] = None
    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def known_preset(self):
        if self.preset not in QUICK_PATTERNS:
            raise ValueError(f"unknown preset {self.preset!r}")
        return self
