from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from redis.asyncio import Redis
from sqlalchemy import text

from levefit.core.config import get_settings
from levefit.db.session import SessionLocal
from levefit.workers.celery_app import celery_app

router = APIRouter(tags=["health"])


async def _ping_database() -> dict[str, Any]:
    async with SessionLocal() as session:
        await session.execute(text("SELECT 1"))
    return {}


async def _ping_redis() -> dict[str, Any]:
    redis_client = Redis.from_url(get_settings().redis_url)
    try:
        pong = await redis_client.ping()
    finally:
        await redis_client.aclose()
    if pong is not True:
        raise RuntimeError(f"unexpected redis ping response: {pong!r}")
    return {}


def _ping_celery_sync() -> dict[str, Any]:
    inspector = celery_app.control.inspect(timeout=1.0)
    if inspector is None:
        raise RuntimeError("celery inspector is unavailable")
    replies = inspector.ping() or {}
    if not replies:
        raise RuntimeError("no celery workers responded to ping")
    return {"workers": len(replies)}


async def _ping_celery() -> dict[str, Any]:
    return await asyncio.to_thread(_ping_celery_sync)


CHECKS: dict[str, Callable[[], Awaitable[dict[str, Any]]]] = {
    "database": _ping_database,
    "redis": _ping_redis,
    "celery": _ping_celery,
}


async def _run_check(check: Callable[[], Awaitable[dict[str, Any]]]) -> dict[str, Any]:
    started = time.perf_counter()
    try:
        extra = await check()
    except Exception as exc:
        return {"status": "failed", "error": str(exc)}
    latency_ms = round((time.perf_counter() - started) * 1000, 1)
    return {"status": "ok", "latency_ms": latency_ms, **extra}


async def _collect_checks() -> dict[str, dict[str, Any]]:
    results = await asyncio.gather(*(_run_check(check) for check in CHECKS.values()))
    return dict(zip(CHECKS, results))


def _response(*, ok_label: str, failed_label: str, checks: dict[str, dict[str, Any]]) -> JSONResponse:
    healthy = all(check.get("status") == "ok" for check in checks.values())
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": ok_label if healthy else failed_label, "checks": checks},
    )


@router.get("/health")
async def health() -> JSONResponse:
    return _response(ok_label="ok", failed_label="degraded", checks=await _collect_checks())


@router.get("/ready")
async def ready() -> JSONResponse:
    return _response(ok_label="ready", failed_label="not_ready", checks=await _collect_checks())


@router.get("/live")
async def live() -> dict[str, str]:
    return {"status": "live"}
