from __future__ import annotations

from types import SimpleNamespace

import pytest


class _FakeTransaction:
    async def __aenter__(self) -> SimpleNamespace:
        return SimpleNamespace()

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        return None


class FakeSessionLocal:
    def __init__(self) -> None:
        self.begin_calls = 0

    def begin(self) -> _FakeTransaction:
        self.begin_calls += 1
        return _FakeTransaction()


@pytest.fixture
def fake_session_local() -> FakeSessionLocal:
    return FakeSessionLocal()
