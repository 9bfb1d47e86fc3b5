from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from core.database import get_db
from member.models import TeamMember
from member import service as member_service


def get_current_member(
    x_member_id: int = Header(..., alias="X-Member-Id"),
    db: Session = Depends(get_db),
) -> TeamMember:
    member = member_service.get_member(db, x_member_id)
    if member is None or not member.is_active:
        raise HTTPException(status_code=401, detail="Unknown or inactive member")
    return member


def require_admin(member: TeamMember = Depends(get_current_member)) -> TeamMember:
    if not member.is_admin:
        raise HTTPException(status_code=403, detail="Admin role required")
    return member


def ensure_self_or_admin(member: TeamMember, worker_id: int) -> None:
    if member.id != worker_id and not member.is_admin:
        raise HTTPException(status_code=403, detail="Cannot act on behalf of another worker")
