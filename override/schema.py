from __future__ import annotations
from datetime import date, datetime, time
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from approval.models import ApprovalStatus


class OverrideSchema(BaseModel):
    id: int
    worker_id: int
    override_date: date
    is_available: bool
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    reason: Optional[str] = None
    status: ApprovalStatus
    admin_notes: Optional[str] = None
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class PendingOverrideSchema(OverrideSchema):
    worker_name: str


# PUBLIC payload (what clients send)
class OverrideSubmitPayload(BaseModel):
    worker_id: Optional[int] = Field(None, description="defaults to the caller")
    override_date: date
    is_available: bool = False
    start_time: Optional[time] = Field(None, description="omit both times for all day")
    end_time: Optional[time] = None
    reason: Optional[str] = Field(None, max_length=500)
    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def validate_window(self):
        if (self.start_time is None) ^ (self.end_time is None):
            raise ValueError("start time and end time must be provided together")
        if self.start_time and self.end_time and self.start_time >= self.end_time:
            raise ValueError("start time must be before end time")
        return self


# INTERNAL DTO for the service
class OverrideSubmit(BaseModel):
    worker_id: int
    override_date: date
    is_available: bool
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    reason: Optional[str] = None
