from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable
from typing import TypeVar

import structlog

from levefit.db.session import dispose_engine

T = TypeVar("T")

logger = structlog.get_logger(__name__)


async def _run_job(awaitable: Awaitable[T], *, job_name: str) -> T:
    # asyncpg connections are bound to the loop that opened them; every asyncio.run starts a new one.
    await dispose_engine()
    started = time.monotonic()
    with structlog.contextvars.bound_contextvars(job=job_name):
        try:
            result = await awaitable
        except Exception:
            logger.exception("worker_job_failed", duration_ms=_elapsed_ms(started))
            raise
        else:
            logger.info("worker_job_finished", duration_ms=_elapsed_ms(started))
            return result
        finally:
            await dispose_engine()


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


def run_async_job(awaitable: Awaitable[T], *, job_name: str = "worker_job") -> T:
    """Run a worker coroutine on a fresh event loop with its own DB pool."""
    return asyncio.run(_run_job(awaitable, job_name=job_name))
