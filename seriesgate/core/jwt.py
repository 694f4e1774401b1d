# seriesgate/core/jwt.py
from __future__ import annotations

"""
SeriesGate — JWT helpers
========================
- `create_access_token` issues short-lived HS* access tokens (iss/aud/iat/nbf/jti)
- `decode_token` validates signature, standard claims, subject, JTI and type
- Case-insensitive Bearer token extraction (optional variant for public pages)

Notes
-----
- No `leeway` is passed to python-jose (unsupported); standard `exp`/`nbf`/`iat` checks apply.
- Errors surface as `InvalidTokenException` (401 + `WWW-Authenticate: Bearer`).
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Sequence
from uuid import uuid4
import logging

from fastapi import Request
from jose import ExpiredSignatureError, JWTError, jwt

from seriesgate.core.config import settings
from seriesgate.core.exceptions import InvalidTokenException

logger = logging.getLogger("seriesgate.auth")


# ─────────────────────────────────────────────────────────────
# 🎟️ Access token creation
# ─────────────────────────────────────────────────────────────
def create_access_token(
    user_id: str,
    expires_delta: Optional[timedelta] = None,
    *,
    extra_claims: Optional[Dict[str, Any]] = None,
) -> str:
    """Create a signed **access token** for `user_id`."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "exp": expire,
        "iat": now,
        "nbf": now,
        "jti": str(uuid4()),
        "token_type": "access",
    }
    if settings.JWT_ISSUER:
        payload["iss"] = settings.JWT_ISSUER
    if settings.JWT_AUDIENCE:
        payload["aud"] = settings.JWT_AUDIENCE
    if extra_claims:
        payload.update(extra_claims)

    return jwt.encode(payload, settings.JWT_SECRET_KEY.get_secret_value(), algorithm=settings.JWT_ALGORITHM)


# ─────────────────────────────────────────────────────────────
# 🔓 Decode
# ─────────────────────────────────────────────────────────────
def decode_token(token: str, *, expected_types: Optional[Sequence[str]] = ("access",)) -> Dict[str, Any]:
    """Decode and validate a JWT.

    Security checks
    ---------------
    1) Verify signature and standard claims (exp/nbf/iat)
    2) Enforce issuer/audience when configured
    3) Require `sub` and `jti`, and `token_type` membership when requested

    Raises
    ------
    InvalidTokenException
        401 for invalid/expired tokens or type mismatch.
    """
    audience = settings.JWT_AUDIENCE or None
    issuer = settings.JWT_ISSUER or None

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_aud": bool(audience)},
            audience=audience,
            issuer=issuer,
        )
    except ExpiredSignatureError:
        logger.info("Token expired.")
        raise InvalidTokenException(detail="Token has expired.")
    except JWTError as e:
        logger.warning(f"JWT decoding failed: {e}")
        raise InvalidTokenException(detail="Invalid token.")

    if not payload.get("sub"):
        logger.warning("Missing sub in token payload.")
        raise InvalidTokenException(detail="Token missing user ID.")

    if not payload.get("jti"):
        logger.warning("Missing JTI in token.")
        raise InvalidTokenException(detail="Token missing JTI.")

    if expected_types is not None and payload.get("token_type") not in set(expected_types):
        logger.warning(f"Token type mismatch: got '{payload.get('token_type')}'")
        raise InvalidTokenException(detail="Invalid token type.")

    return payload


# ─────────────────────────────────────────────────────────────
# 📥 Extract Bearer Token from Authorization Header
# ─────────────────────────────────────────────────────────────
def get_optional_bearer_token(request: Request) -> Optional[str]:
    """Return the Bearer token, or None when no `Authorization` header was sent.

    A header that is present but malformed is still rejected.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None

    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.warning("Malformed Authorization header.")
        raise InvalidTokenException(detail="Invalid Authorization scheme.")

    return parts[1].strip()


def get_bearer_token(request: Request) -> str:
    """Extract a Bearer token from the `Authorization` header (case-insensitive)."""
    token = get_optional_bearer_token(request)
    if not token:
        logger.warning("Missing Authorization header.")
        raise InvalidTokenException(detail="Missing Authorization header.")
    return token


__all__ = [
    "create_access_token",
    "decode_token",
    "get_bearer_token",
    "get_optional_bearer_token",
]
