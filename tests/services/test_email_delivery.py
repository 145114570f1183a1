from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any

import httpx
import pytest

from levefit.services import email_delivery


class _Response:
    def __init__(self, *, fail: bool) -> None:
        self._fail = fail

    def raise_for_status(self) -> None:
        if self._fail:
            raise httpx.HTTPError("delivery failed")


class _Client:
    def __init__(self, calls: list[dict[str, Any]], *, fail: bool) -> None:
        self._calls = calls
        self._fail = fail

    async def __aenter__(self) -> "_Client":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        return None

    async def post(self, url: str, json: dict[str, object]) -> _Response:
        self._calls.append({"url": url, "json": json})
        return _Response(fail=self._fail)


def _settings(**overrides: object) -> SimpleNamespace:
    base = {
        "resend_api_key": "re_test",
        "resend_api_url": "https://api.resend.test/emails",
        "admin_email": "admin@levefit.test",
        "email_from": "LeveFit <noreply@levefit.test>",
    }
    base.update(overrides)
    return SimpleNamespace(**base)


def _patch_http_client(monkeypatch: pytest.MonkeyPatch, calls: list[dict[str, Any]], *, fail: bool = False) -> None:
    def factory(timeout: float, headers: dict[str, str]) -> _Client:  # noqa: ARG001
        return _Client(calls, fail=fail)

    monkeypatch.setattr(email_delivery.httpx, "AsyncClient", factory)


def test_send_admin_email_skips_when_not_configured(monkeypatch) -> None:
    calls: list[dict[str, Any]] = []
    monkeypatch.setattr(email_delivery, "get_settings", lambda: _settings(resend_api_key=""))
    _patch_http_client(monkeypatch, calls)

    delivered = asyncio.run(email_delivery.send_admin_email(subject="s", html="<p>x</p>", event="test"))

    assert delivered is False
    assert calls == []


def test_send_admin_email_posts_to_admin(monkeypatch) -> None:
    calls: list[dict[str, Any]] = []
    monkeypatch.setattr(email_delivery, "get_settings", lambda: _settings())
    _patch_http_client(monkeypatch, calls)

    delivered = asyncio.run(
        email_delivery.send_admin_email(subject="Nova reserva", html="<p>x</p>", event="reservation_created")
    )

    assert delivered is True
    assert calls[0]["url"] == "https://api.resend.test/emails"
    assert calls[0]["json"]["to"] == ["admin@levefit.test"]
    assert calls[0]["json"]["subject"] == "Nova reserva"


def test_send_admin_email_reports_delivery_failure(monkeypatch) -> None:
    calls: list[dict[str, Any]] = []
    monkeypatch.setattr(email_delivery, "get_settings", lambda: _settings())
    _patch_http_client(monkeypatch, calls, fail=True)

    delivered = asyncio.run(email_delivery.send_admin_email(subject="s", html="<p>x</p>", event="test"))

    assert delivered is False
    assert len(calls) == 1
