from __future__ import annotations
from datetime import date
from typing import List
from pydantic import BaseModel, ConfigDict

from resolution.schema import AvailabilityStatusSchema


class WorkerDayStatusSchema(BaseModel):
    worker_id: int
    name: str
    on: date
    availability: AvailabilityStatusSchema
    model_config = ConfigDict(from_attributes=True)


class TeamSnapshotSchema(BaseModel):
    on: date
    total_workers: int
    available_count: int
    unavailable_count: int
    time_off_count: int
    override_count: int
    members: List[WorkerDayStatusSchema] = []
    model_config = ConfigDict(from_attributes=True)
