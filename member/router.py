from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.database import get_db
from authz.deps import get_current_member, require_admin
from .schema import TeamMemberSchema, TeamMemberCreatePayload, TeamMemberUpdate
from . import service

member_router = APIRouter(prefix="/members", tags=["Team Members"])

# List schedulable team members
@member_router.get("", response_model=list[TeamMemberSchema])
def list_members(db: Session = Depends(get_db), member=Depends(get_current_member)):
    return service.list_team_members(db)

# Get member by id
@member_router.get("/{member_id}", response_model=TeamMemberSchema)
def member_detail(member_id: int, db: Session = Depends(get_db), member=Depends(get_current_member)):
    obj = service.get_member(db, member_id)
    if not obj:
        raise HTTPException(status_code=404, detail="member not found")
    return obj

# Create member (admin only)
@member_router.post("", response_model=TeamMemberSchema, status_code=status.HTTP_201_CREATED)
def member_post(payload: TeamMemberCreatePayload, db: Session = Depends(get_db), _admin=Depends(require_admin)):
    return service.create_member(db, payload)

# Update member (admin only)
@member_router.patch("/{member_id}", response_model=TeamMemberSchema)
def member_patch(member_id: int, payload: TeamMemberUpdate, db: Session = Depends(get_db), _admin=Depends(require_admin)):
    obj = service.update_member(db, member_id, payload)
    if not obj:
        raise HTTPException(status_code=404, detail="member not found")
    return obj
