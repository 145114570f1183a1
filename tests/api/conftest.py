from __future__ import annotations

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from uuid import UUID, uuid4

import jwt
import pytest

from levefit.api.routes import request_auth

JWT_SECRET = "test-jwt-secret"
JWT_AUDIENCE = "authenticated"
INTERNAL_TOKEN = "internal-secret"


def make_token(user_id: UUID, *, email: str | None = "ana@example.com") -> str:
    claims: dict[str, object] = {
        "sub": str(user_id),
        "aud": JWT_AUDIENCE,
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
    }
    if email is not None:
        claims["email"] = email
    return jwt.encode(claims, JWT_SECRET, algorithm="HS256")


@pytest.fixture(autouse=True)
def auth_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        request_auth,
        "get_settings",
        lambda: SimpleNamespace(
            auth_jwt_secret=JWT_SECRET,
            auth_jwt_audience=JWT_AUDIENCE,
            internal_api_token=INTERNAL_TOKEN,
        ),
    )


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def auth_headers(user_id: UUID) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


@pytest.fixture
def token_factory():
    return make_token
