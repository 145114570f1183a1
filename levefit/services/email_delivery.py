from __future__ import annotations

from typing import Any

import httpx
import structlog

from levefit.core.config import get_settings

logger = structlog.get_logger(__name__)


async def post_json(
    *,
    client: httpx.AsyncClient,
    url: str,
    body: dict[str, Any],
    event: str,
) -> bool:
    try:
        response = await client.post(url, json=body)
        response.raise_for_status()
        return True
    except httpx.HTTPError:
        logger.exception("email_delivery_failed", email_event=event)
        return False


async def send_admin_email(*, subject: str, html: str, event: str) -> bool:
    settings = get_settings()
    if not settings.resend_api_key or not settings.admin_email:
        logger.info("email_delivery_skipped_not_configured", email_event=event)
        return False

    body = {
        "from": settings.email_from,
        "to": [settings.admin_email],
        "subject": subject,
        "html": html,
    }
    headers = {"Authorization": f"Bearer {settings.resend_api_key}"}
    async with httpx.AsyncClient(timeout=5.0, headers=headers) as client:
        delivered = await post_json(
            client=client,
            url=settings.resend_api_url,
            body=body,
            event=event,
        )

    if delivered:
        logger.info("email_delivered", email_event=event)
    return delivered
