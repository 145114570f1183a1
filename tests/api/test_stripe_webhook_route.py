from __future__ import annotations

import hashlib
import hmac
import json
import time
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from levefit.api.routes import stripe_webhook
from levefit.main import app

SECRET = "whsec_test"


@pytest.fixture(autouse=True)
def stripe_settings(monkeypatch: pytest.MonkeyPatch, fake_session_local) -> None:
    monkeypatch.setattr(stripe_webhook, "get_settings", lambda: SimpleNamespace(stripe_webhook_secret=SECRET))
    monkeypatch.setattr(stripe_webhook, "SessionLocal", fake_session_local)


def _signature(payload: bytes) -> str:
    timestamp = int(time.time())
    signed_payload = f"{timestamp}.".encode("utf-8") + payload
    signature = hmac.new(SECRET.encode("utf-8"), signed_payload, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


def _patch_handler(monkeypatch: pytest.MonkeyPatch, outcome: object, calls: list[dict[str, object]]) -> None:
    async def fake_handle(session, **kwargs):  # noqa: ARG001
        calls.append(kwargs)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(stripe_webhook.CheckoutService, "handle_stripe_event", staticmethod(fake_handle))


def test_stripe_webhook_requires_secret(monkeypatch) -> None:
    monkeypatch.setattr(stripe_webhook, "get_settings", lambda: SimpleNamespace(stripe_webhook_secret=""))

    response = TestClient(app).post("/stripe-webhook", content=b"{}")

    assert response.status_code == 500


def test_stripe_webhook_rejects_invalid_signature(monkeypatch) -> None:
    calls: list[dict[str, object]] = []
    _patch_handler(monkeypatch, True, calls)

    response = TestClient(app).post(
        "/stripe-webhook",
        content=b'{"id":"evt_1"}',
        headers={"stripe-signature": "t=1,v1=bad"},
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid signature"}
    assert calls == []


def test_stripe_webhook_dispatches_event(monkeypatch) -> None:
    calls: list[dict[str, object]] = []
    _patch_handler(monkeypatch, True, calls)
    payload = json.dumps(
        {"id": "evt_1", "type": "checkout.session.completed", "data": {"object": {"id": "cs_1"}}}
    ).encode("utf-8")

    response = TestClient(app).post(
        "/stripe-webhook",
        content=payload,
        headers={"stripe-signature": _signature(payload)},
    )

    assert response.status_code == 200
    assert response.json() == {"received": True}
    assert calls[0]["event"]["type"] == "checkout.session.completed"


def test_stripe_webhook_handler_failure_returns_500(monkeypatch) -> None:
    _patch_handler(monkeypatch, RuntimeError("db down"), [])
    payload = b'{"id":"evt_2","type":"payment_intent.payment_failed"}'

    response = TestClient(app).post(
        "/stripe-webhook",
        content=payload,
        headers={"stripe-signature": _signature(payload)},
    )

    assert response.status_code == 500


def test_stripe_webhook_rejects_signed_non_json_body(monkeypatch) -> None:
    calls: list[dict[str, object]] = []
    _patch_handler(monkeypatch, True, calls)
    payload = b"not json"

    response = TestClient(app).post(
        "/stripe-webhook",
        content=payload,
        headers={"stripe-signature": _signature(payload)},
    )

    assert response.status_code == 400
    assert calls == []
