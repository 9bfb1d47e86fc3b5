from typing import Iterable, Optional, List
from sqlalchemy.orm import Session
from sqlalchemy import select

from core.database import store_call
from .models import TeamMember, MemberRole
from .schema import TeamMemberCreatePayload, TeamMemberUpdate

# every role is schedulable
SCHEDULABLE_ROLES = (MemberRole.worker, MemberRole.manager, MemberRole.admin)


@store_call
def list_team_members(
    db: Session,
    *,
    roles: Iterable[MemberRole] = SCHEDULABLE_ROLES,
    active_only: bool = True,
) -> List[TeamMember]:
    statement = select(TeamMember).where(TeamMember.role.in_(list(roles)))
    if active_only:
        statement = statement.where(TeamMember.is_active.is_(True))
    statement = statement.order_by(TeamMember.name.asc(), TeamMember.id.asc())
    return list(db.scalars(statement))


@store_call
def get_member(db: Session, member_id: int) -> Optional[TeamMember]:
    return db.get(TeamMember, member_id)


@store_call
def create_member(db: Session, member: TeamMemberCreatePayload) -> TeamMember:
    db_member = TeamMember(
        name=member.name,
        role=member.role,
        avatar_url=member.avatar_url,
        phone=member.phone,
    )
    db.add(db_member)
    db.commit()
    db.refresh(db_member)
    return db_member


@store_call
def update_member(db: Session, member_id: int, patch: TeamMemberUpdate) -> Optional[TeamMember]:
    db_member = db.get(TeamMember, member_id)
    if not db_member:
        return None
    data = patch.model_dump(exclude_unset=True)
    for k, v in data.items():
        setattr(db_member, k, v)
    db.commit()
    db.refresh(db_member)
    return db_member
