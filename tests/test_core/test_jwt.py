# tests/test_core/test_jwt.py

from datetime import timedelta

import pytest
from jose import jwt
from starlette.requests import Request

from seriesgate.core.config import settings
from seriesgate.core.exceptions import InvalidTokenException
from seriesgate.core.jwt import (
    create_access_token,
    decode_token,
    get_bearer_token,
    get_optional_bearer_token,
)


def _request(headers=None) -> Request:
    raw = [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or {}).items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw})


def _sign(claims):
    return jwt.encode(claims, settings.JWT_SECRET_KEY.get_secret_value(), algorithm=settings.JWT_ALGORITHM)


def test_access_token_round_trip_claims():
    token = create_access_token("user-1", extra_claims={"scope": "read"})
    payload = decode_token(token)
    assert payload["sub"] == "user-1"
    assert payload["token_type"] == "access"
    assert payload["scope"] == "read"
    assert payload["jti"]
    assert payload["exp"] > payload["iat"]


def test_expired_token_rejected():
    token = create_access_token("user-1", expires_delta=timedelta(seconds=-5))
    with pytest.raises(InvalidTokenException) as ei:
        decode_token(token)
    assert ei.value.status_code == 401
    assert ei.value.detail == "Token has expired."
    assert ei.value.headers == {"WWW-Authenticate": "Bearer"}


def test_wrong_signature_rejected():
    token = jwt.encode({"sub": "u", "jti": "j", "token_type": "access"}, "another-secret", algorithm="HS256")
    with pytest.raises(InvalidTokenException, match="Invalid token"):
        decode_token(token)


@pytest.mark.parametrize(
    "claims, message",
    [
        ({"jti": "j", "token_type": "access"}, "Token missing user ID."),
        ({"sub": "u", "token_type": "access"}, "Token missing JTI."),
        ({"sub": "u", "jti": "j", "token_type": "refresh"}, "Invalid token type."),
    ],
)
def test_required_claims(claims, message):
    with pytest.raises(InvalidTokenException) as ei:
        decode_token(_sign(claims))
    assert ei.value.detail == message


def test_token_type_check_can_be_disabled():
    payload = decode_token(_sign({"sub": "u", "jti": "j", "token_type": "refresh"}), expected_types=None)
    assert payload["token_type"] == "refresh"


def test_optional_bearer_token():
    assert get_optional_bearer_token(_request()) is None
    assert get_optional_bearer_token(_request({"Authorization": "bearer abc"})) == "abc"
    with pytest.raises(InvalidTokenException):
        get_optional_bearer_token(_request({"Authorization": "Basic abc"}))
    with pytest.raises(InvalidTokenException):
        get_optional_bearer_token(_request({"Authorization": "Bearer a b"}))


def test_bearer_token_required():
    assert get_bearer_token(_request({"Authorization": "Bearer xyz"})) == "xyz"
    with pytest.raises(InvalidTokenException, match="Missing Authorization header"):
        get_bearer_token(_request())
