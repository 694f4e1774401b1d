from __future__ import annotations

"""
👤 SeriesGate — User
====================

Account record read by the identity layer to build a `Viewer`. Only the
fields gating needs live here: identity, role and the active flag.
"""

from uuid import uuid4

from sqlalchemy import Boolean, CheckConstraint, Column, Enum as SAEnum, Index, String, func, true

from seriesgate.db.base_class import Base, TimestampMixin
from seriesgate.schemas.enums import UserRole


def _new_user_id() -> str:
    return str(uuid4())


class User(TimestampMixin, Base):
    """Account with a role; `SUPER_ADMIN` sees every episode unlocked."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_user_id)
    email = Column(String(320), nullable=False, unique=True)
    name = Column(String(255), nullable=True)
    role = Column(
        SAEnum(UserRole, name="user_role"),
        nullable=False,
        default=UserRole.USER,
        server_default=UserRole.USER.value,
    )
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())

    __table_args__ = (
        CheckConstraint("length(email) > 0", name="email_not_blank"),
        Index("ix_users_email_lower", func.lower(email)),
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<User id={self.id} role={self.role}>"
