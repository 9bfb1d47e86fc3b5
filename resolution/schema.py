from __future__ import annotations
from datetime import date
from typing import List
from pydantic import BaseModel, ConfigDict

from override.schema import OverrideSchema
from timeoff.schema import TimeOffRequestSchema
from .engine import Source, Status


class AvailabilityStatusSchema(BaseModel):
    status: Status
    source: Source
    detail: str
    calendar_state: Status
    model_config = ConfigDict(from_attributes=True)


class WorkerAvailabilitySchema(AvailabilityStatusSchema):
    worker_id: int
    on: date


class WorkerSummarySchema(BaseModel):
    worker_id: int
    today: AvailabilityStatusSchema
    pending_requests: int
    pending_overrides: int
    upcoming_time_off: List[TimeOffRequestSchema]
    recent_overrides: List[OverrideSchema]
    model_config = ConfigDict(from_attributes=True)
