import pytest
from typing import Awaitable, Callable, Dict, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from seriesgate.core.jwt import create_access_token
from seriesgate.db.models import User
from tests.utils.factory import create_user


# ─────────────────────────────────────────────────────────────
# 🔐 Token + Auth Fixtures for Testing
# ─────────────────────────────────────────────────────────────
def auth_headers(user_id: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(str(user_id))}"}


@pytest.fixture
def user_with_headers(db_session: AsyncSession) -> Callable[..., Awaitable[Tuple[User, Dict[str, str]]]]:
    """Create a user and return `(user, {"Authorization": "Bearer ..."})`."""
    async def _create(**kwargs):
        user = await create_user(db_session, **kwargs)
        await db_session.commit()
        return user, auth_headers(user.id)

    return _create
