from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

import jwt


class AuthTokenError(Exception):
    pass


@dataclass(frozen=True, slots=True)
class AuthenticatedUser:
    user_id: UUID
    email: str | None


def decode_access_token(token: str, *, secret: str, audience: str) -> AuthenticatedUser:
    if not token or not secret:
        raise AuthTokenError("missing token or secret")

    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=["HS256"],
            audience=audience,
            options={"require": ["sub", "exp"]},
        )
    except jwt.PyJWTError as exc:
        raise AuthTokenError(str(exc)) from exc

    try:
        user_id = UUID(str(claims["sub"]))
    except ValueError as exc:
        raise AuthTokenError("sub is not a user id") from exc

    email = claims.get("email")
    return AuthenticatedUser(user_id=user_id, email=str(email) if email else None)


def extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
