from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import Any

import structlog
from pywebpush import WebPushException, webpush

from levefit.core.config import get_settings

logger = structlog.get_logger(__name__)

PUSH_TTL_SECONDS = 86400
DEFAULT_ICON = "/pwa-192x192.png"
DEFAULT_URL = "/dashboard"
GONE_STATUS_CODES = frozenset({404, 410})


@dataclass(frozen=True, slots=True)
class PushMessage:
    title: str
    body: str
    tag: str
    url: str = DEFAULT_URL
    icon: str = DEFAULT_ICON

    def to_payload(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "body": self.body,
            "icon": self.icon,
            "tag": self.tag,
            "data": {"url": self.url},
        }


@dataclass(frozen=True, slots=True)
class PushTarget:
    endpoint: str
    p256dh: str
    auth: str


@dataclass(frozen=True, slots=True)
class PushDeliveryResult:
    delivered: bool
    gone: bool
    status_code: int | None = None


def _send_sync(target: PushTarget, message: PushMessage) -> PushDeliveryResult:
    settings = get_settings()
    try:
        response = webpush(
            subscription_info={
                "endpoint": target.endpoint,
                "keys": {"p256dh": target.p256dh, "auth": target.auth},
            },
            data=json.dumps(message.to_payload()),
            vapid_private_key=settings.vapid_private_key,
            vapid_claims={"sub": settings.vapid_subject},
            ttl=PUSH_TTL_SECONDS,
        )
    except WebPushException as exc:
        status_code = exc.response.status_code if exc.response is not None else None
        logger.warning(
            "push_delivery_failed",
            status_code=status_code,
            endpoint_host=target.endpoint.split("/")[2] if "//" in target.endpoint else None,
        )
        return PushDeliveryResult(
            delivered=False,
            gone=status_code in GONE_STATUS_CODES,
            status_code=status_code,
        )
    return PushDeliveryResult(
        delivered=True,
        gone=False,
        status_code=getattr(response, "status_code", None),
    )


async def send_web_push(target: PushTarget, message: PushMessage) -> PushDeliveryResult:
    """Delivers one VAPID-signed push; the blocking HTTP call runs in a worker thread."""
    return await asyncio.to_thread(_send_sync, target, message)


def is_push_configured() -> bool:
    settings = get_settings()
    return bool(settings.vapid_private_key and settings.vapid_public_key)
