from __future__ import annotations
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from approval.models import ApprovalStatus
from .models import TimeOffType


class TimeOffRequestSchema(BaseModel):
    id: int
    worker_id: int
    start_date: date
    end_date: date
    request_type: TimeOffType
    reason: Optional[str] = None
    status: ApprovalStatus
    days_requested: int
    admin_notes: Optional[str] = None
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class PendingTimeOffSchema(TimeOffRequestSchema):
    worker_name: str


# PUBLIC payload (what clients send); days_requested is always derived
class TimeOffRequestPayload(BaseModel):
    worker_id: Optional[int] = Field(None, description="defaults to the caller")
    start_date: date
    end_date: date
    request_type: TimeOffType = TimeOffType.vacation
    reason: Optional[str] = Field(None, max_length=500)
    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def validate_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must be on/after start_date")
        return self


# INTERNAL DTO for the service
class TimeOffRequestCreate(BaseModel):
    worker_id: int
    start_date: date
    end_date: date
    request_type: TimeOffType | str = TimeOffType.vacation
    reason: Optional[str] = None
