from __future__ import annotations

import asyncio
from types import SimpleNamespace

from pywebpush import WebPushException

from levefit.services import web_push
from levefit.services.web_push import PushMessage, PushTarget

TARGET = PushTarget(endpoint="https://push.example.test/abc", p256dh="p256dh-key", auth="auth-key")


def _settings() -> SimpleNamespace:
    return SimpleNamespace(
        vapid_private_key="private",
        vapid_public_key="public",
        vapid_subject="mailto:admin@levefit.test",
    )


def test_push_message_payload_shape() -> None:
    payload = PushMessage(title="Oi", body="Corpo", tag="tag-1").to_payload()

    assert payload == {
        "title": "Oi",
        "body": "Corpo",
        "icon": "/pwa-192x192.png",
        "tag": "tag-1",
        "data": {"url": "/dashboard"},
    }


def test_send_web_push_reports_delivery(monkeypatch) -> None:
    calls: list[dict[str, object]] = []

    def fake_webpush(**kwargs: object) -> SimpleNamespace:
        calls.append(kwargs)
        return SimpleNamespace(status_code=201)

    monkeypatch.setattr(web_push, "get_settings", _settings)
    monkeypatch.setattr(web_push, "webpush", fake_webpush)

    result = asyncio.run(web_push.send_web_push(TARGET, PushMessage(title="Oi", body="Corpo", tag="t")))

    assert result.delivered is True
    assert result.gone is False
    assert calls[0]["subscription_info"] == {
        "endpoint": TARGET.endpoint,
        "keys": {"p256dh": "p256dh-key", "auth": "auth-key"},
    }
    assert calls[0]["vapid_claims"] == {"sub": "mailto:admin@levefit.test"}


def test_send_web_push_marks_gone_subscriptions(monkeypatch) -> None:
    def fake_webpush(**kwargs: object) -> None:  # noqa: ARG001
        raise WebPushException("gone", response=SimpleNamespace(status_code=410))

    monkeypatch.setattr(web_push, "get_settings", _settings)
    monkeypatch.setattr(web_push, "webpush", fake_webpush)

    result = asyncio.run(web_push.send_web_push(TARGET, PushMessage(title="Oi", body="Corpo", tag="t")))

    assert result.delivered is False
    assert result.gone is True
    assert result.status_code == 410


def test_send_web_push_keeps_subscription_on_transient_failure(monkeypatch) -> None:
    def fake_webpush(**kwargs: object) -> None:  # noqa: ARG001
        raise WebPushException("boom", response=SimpleNamespace(status_code=500))

    monkeypatch.setattr(web_push, "get_settings", _settings)
    monkeypatch.setattr(web_push, "webpush", fake_webpush)

    result = asyncio.run(web_push.send_web_push(TARGET, PushMessage(title="Oi", body="Corpo", tag="t")))

    assert result.delivered is False
    assert result.gone is False
