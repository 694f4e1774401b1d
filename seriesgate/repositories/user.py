from __future__ import annotations

"""User lookup used to resolve the request viewer from a bearer token."""

from typing import Optional

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from seriesgate.db.models.user import User
from seriesgate.db.session import get_async_db


class UserRepositoryProtocol:
    async def get_user(self, user_id: str) -> Optional[User]:
        raise NotImplementedError


class SqlUserRepository(UserRepositoryProtocol):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_user(self, user_id: str) -> Optional[User]:
        rows = await self.session.execute(select(User).where(User.id == str(user_id)))
        return rows.scalar_one_or_none()


def get_user_repository(db: AsyncSession = Depends(get_async_db)) -> UserRepositoryProtocol:
    return SqlUserRepository(db)


__all__ = ["UserRepositoryProtocol", "SqlUserRepository", "get_user_repository"]
