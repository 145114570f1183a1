from __future__ import annotations

import structlog
from fastapi import HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from levefit.core.config import get_settings
from levefit.db.repo.user_roles_repo import UserRolesRepo
from levefit.services.auth_tokens import (
    AuthenticatedUser,
    AuthTokenError,
    decode_access_token,
    extract_bearer_token,
)
from levefit.services.internal_auth import is_internal_request_authenticated

logger = structlog.get_logger(__name__)
ADMIN_ROLE = "admin"


def require_user(request: Request) -> AuthenticatedUser:
    settings = get_settings()
    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        raise HTTPException(status_code=401, detail={"code": "E_UNAUTHORIZED"})

    try:
        return decode_access_token(
            token,
            secret=settings.auth_jwt_secret,
            audience=settings.auth_jwt_audience,
        )
    except AuthTokenError as exc:
        logger.info("auth_token_rejected", reason=str(exc))
        raise HTTPException(status_code=401, detail={"code": "E_UNAUTHORIZED"}) from exc


async def is_admin(session: AsyncSession, user: AuthenticatedUser) -> bool:
    return await UserRolesRepo.has_role(session, user_id=user.user_id, role=ADMIN_ROLE)


async def require_admin(session: AsyncSession, user: AuthenticatedUser) -> None:
    if not await is_admin(session, user):
        logger.warning("admin_access_denied", user_id=str(user.user_id))
        raise HTTPException(status_code=403, detail={"code": "E_FORBIDDEN"})


def assert_internal_access(request: Request) -> None:
    if not is_internal_request_authenticated(
        request,
        expected_token=get_settings().internal_api_token,
    ):
        logger.warning("internal_auth_failed", path=request.url.path)
        raise HTTPException(status_code=403, detail={"code": "E_FORBIDDEN"})
