from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from .models import Decision


class DecisionPayload(BaseModel):
    decision: Decision
    admin_notes: Optional[str] = Field(None, max_length=2000)
    model_config = ConfigDict(extra="forbid")


class NotesPayload(BaseModel):
    admin_notes: Optional[str] = Field(None, max_length=2000)
    model_config = ConfigDict(extra="forbid")
