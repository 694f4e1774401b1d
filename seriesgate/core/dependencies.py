# seriesgate/core/dependencies.py
from __future__ import annotations

"""
Request dependencies — SeriesGate
=================================

Resolves the request **viewer** used by the episode access evaluator.

- No `Authorization` header            → `Anonymous`
- Valid Bearer access token + active user → `AuthenticatedUser(id, role)`
- Malformed/expired token, unknown or inactive user → 401

Token decoding and Bearer parsing live in `seriesgate.core.jwt`; this module
only *uses* them.
"""

import logging

from fastapi import Depends, Request

from seriesgate.core.exceptions import InvalidTokenException
from seriesgate.core.jwt import decode_token, get_optional_bearer_token
from seriesgate.repositories.user import UserRepositoryProtocol, get_user_repository
from seriesgate.services.episode_access import ANONYMOUS, AuthenticatedUser, Viewer

logger = logging.getLogger(__name__)

__all__ = ["get_viewer", "require_user"]


async def get_viewer(
    request: Request,
    users: UserRepositoryProtocol = Depends(get_user_repository),
) -> Viewer:
    """Return the viewer for this request; anonymous when no token is sent."""
    token = get_optional_bearer_token(request)
    if token is None:
        return ANONYMOUS

    payload = decode_token(token)
    user = await users.get_user(str(payload["sub"]))
    if user is None or not user.is_active:
        raise InvalidTokenException(detail="Inactive or unknown user")

    request.state.user_id = str(user.id)
    logger.debug("[Auth] Authenticated viewer %s", user.id)
    return AuthenticatedUser(id=str(user.id), role=user.role)


async def require_user(viewer: Viewer = Depends(get_viewer)) -> AuthenticatedUser:
    """Like `get_viewer`, but anonymous requests get a 401."""
    if not isinstance(viewer, AuthenticatedUser):
        raise InvalidTokenException(detail="Authentication required")
    return viewer
