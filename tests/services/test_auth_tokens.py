from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from levefit.services.auth_tokens import AuthTokenError, decode_access_token, extract_bearer_token

SECRET = "jwt-secret"
AUDIENCE = "authenticated"


def _token(**claims: object) -> str:
    payload: dict[str, object] = {
        "aud": AUDIENCE,
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
    }
    payload.update(claims)
    return jwt.encode(payload, SECRET, algorithm="HS256")


def test_decode_access_token_returns_user() -> None:
    user_id = uuid4()

    user = decode_access_token(_token(sub=str(user_id), email="ana@example.com"), secret=SECRET, audience=AUDIENCE)

    assert user.user_id == user_id
    assert user.email == "ana@example.com"


def test_decode_access_token_rejects_expired_token() -> None:
    token = _token(sub=str(uuid4()), exp=datetime.now(timezone.utc) - timedelta(minutes=1))

    with pytest.raises(AuthTokenError):
        decode_access_token(token, secret=SECRET, audience=AUDIENCE)


def test_decode_access_token_rejects_wrong_secret_and_audience() -> None:
    token = _token(sub=str(uuid4()))

    with pytest.raises(AuthTokenError):
        decode_access_token(token, secret="other-secret", audience=AUDIENCE)
    with pytest.raises(AuthTokenError):
        decode_access_token(token, secret=SECRET, audience="anon")


def test_decode_access_token_requires_uuid_subject() -> None:
    with pytest.raises(AuthTokenError):
        decode_access_token(_token(sub="not-a-uuid"), secret=SECRET, audience=AUDIENCE)
    with pytest.raises(AuthTokenError):
        decode_access_token(_token(), secret=SECRET, audience=AUDIENCE)


def test_extract_bearer_token() -> None:
    assert extract_bearer_token("Bearer abc.def") == "abc.def"
    assert extract_bearer_token("bearer abc") == "abc"
    assert extract_bearer_token("Basic abc") is None
    assert extract_bearer_token("Bearer ") is None
    assert extract_bearer_token(None) is None
