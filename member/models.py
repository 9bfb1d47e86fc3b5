from __future__ import annotations
from enum import Enum
from sqlalchemy import String, Boolean, true, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column
from core.database import Base


class MemberRole(str, Enum):
    worker = "worker"
    manager = "manager"
    admin = "admin"


class TeamMember(Base):
    __tablename__ = "team_members"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[MemberRole] = mapped_column(
        SAEnum(MemberRole, name="member_role"), nullable=False, default=MemberRole.worker, index=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, server_default=true(), nullable=False)

    avatar_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)

    @property
    def is_admin(self) -> bool:
        # managers decide exceptions alongside admins
        return self.role in (MemberRole.manager, MemberRole.admin)
