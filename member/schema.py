from pydantic import BaseModel, ConfigDict
from typing import Optional

from .models import MemberRole


class TeamMemberSchema(BaseModel):
    id: int
    name: str
    role: MemberRole
    is_active: bool = True
    avatar_url: Optional[str] = None
    phone: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


# PUBLIC payload, what clients send
class TeamMemberCreatePayload(BaseModel):
    name: str
    role: MemberRole = MemberRole.worker
    avatar_url: Optional[str] = None
    phone: Optional[str] = None
    model_config = ConfigDict(extra="forbid")


class TeamMemberUpdate(BaseModel):
    name: Optional[str] = None
    role: Optional[MemberRole] = None
    is_active: Optional[bool] = None
    avatar_url: Optional[str] = None
    phone: Optional[str] = None
    model_config = ConfigDict(extra="forbid")
