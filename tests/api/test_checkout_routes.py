from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from levefit.api.routes import checkout as checkout_routes
from levefit.db.models.reservations import Reservation
from levefit.db.repo.wallets_repo import WalletsRepo
from levefit.economy.checkout.errors import EmptyCartError
from levefit.main import app
from levefit.services.stripe_client import StripeError

ITEMS = [
    {"variant_id": "gid://variant/1", "title": "LeveFit 1 Pote", "price": "197.00", "quantity": 1},
    {"variant_id": "gid://variant/3", "title": "LeveFit 3 Potes", "price": "297.00", "quantity": 2},
]


def _settings(**overrides: object) -> SimpleNamespace:
    base = {
        "stripe_secret_key": "sk_test",
        "public_app_url": "https://app.levefit.test",
        "pix_code_1_pote": "00020126PIX1",
        "pix_code_3_potes": "",
        "pix_code_5_potes": "",
    }
    base.update(overrides)
    return SimpleNamespace(**base)


@pytest.fixture(autouse=True)
def checkout_env(monkeypatch: pytest.MonkeyPatch, fake_session_local) -> None:
    monkeypatch.setattr(checkout_routes, "get_settings", lambda: _settings())
    monkeypatch.setattr(checkout_routes, "SessionLocal", fake_session_local)
    monkeypatch.setattr(checkout_routes, "get_stripe_client", lambda: SimpleNamespace())
    _patch_wallet_balance(monkeypatch, Decimal("100.00"))


def _patch_wallet_balance(monkeypatch: pytest.MonkeyPatch, balance: Decimal | None) -> None:
    async def fake_get_by_user_id(session, user_id):  # noqa: ARG001
        if balance is None:
            return None
        return SimpleNamespace(user_id=user_id, balance=balance)

    monkeypatch.setattr(WalletsRepo, "get_by_user_id", staticmethod(fake_get_by_user_id))


def _patch_checkout(
    monkeypatch: pytest.MonkeyPatch,
    outcome: object,
    calls: list[dict[str, object]],
    orders: list[dict[str, object]],
) -> None:
    async def fake_create(**kwargs):
        calls.append(kwargs)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def fake_record(session, **kwargs):  # noqa: ARG001
        orders.append(kwargs)

    monkeypatch.setattr(checkout_routes.CheckoutService, "create_checkout_session", staticmethod(fake_create))
    monkeypatch.setattr(checkout_routes.CheckoutService, "record_pending_order", staticmethod(fake_record))


def test_create_checkout_requires_auth() -> None:
    response = TestClient(app).post("/create-checkout", json={"items": ITEMS})

    assert response.status_code == 401


def test_create_checkout_rejects_empty_items(auth_headers) -> None:
    response = TestClient(app).post("/create-checkout", json={"items": []}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "No items provided"}


def test_create_checkout_requires_stripe_key(monkeypatch, auth_headers) -> None:
    monkeypatch.setattr(checkout_routes, "get_settings", lambda: _settings(stripe_secret_key=""))

    response = TestClient(app).post("/create-checkout", json={"items": ITEMS}, headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"error": "Stripe not configured"}


def test_create_checkout_requires_user_email(token_factory, user_id) -> None:
    headers = {"Authorization": f"Bearer {token_factory(user_id, email=None)}"}

    response = TestClient(app).post("/create-checkout", json={"items": ITEMS}, headers=headers)

    assert response.status_code == 400


def test_create_checkout_returns_session_url(monkeypatch, auth_headers, user_id) -> None:
    calls: list[dict[str, object]] = []
    orders: list[dict[str, object]] = []
    _patch_checkout(
        monkeypatch,
        {"id": "cs_test_1", "url": "https://checkout.stripe.test/cs_test_1"},
        calls,
        orders,
    )

    response = TestClient(app).post(
        "/create-checkout",
        json={"items": ITEMS, "affiliate_code": "AFXYZ", "wallet_discount": "50.00"},
        headers={**auth_headers, "origin": "https://store.levefit.test"},
    )

    assert response.status_code == 200
    assert response.json() == {"url": "https://checkout.stripe.test/cs_test_1"}
    assert calls[0]["origin"] == "https://store.levefit.test"
    assert calls[0]["affiliate_code"] == "AFXYZ"
    assert calls[0]["wallet_discount"] == Decimal("50.00")
    assert calls[0]["cart"].total_quantity == 3
    assert orders[0]["stripe_session_id"] == "cs_test_1"
    assert orders[0]["user_id"] == user_id
    assert len(orders[0]["items"]) == 2


def test_create_checkout_rejects_discount_above_wallet_balance(monkeypatch, auth_headers) -> None:
    calls: list[dict[str, object]] = []
    _patch_checkout(monkeypatch, {"id": "cs_test_1", "url": "https://checkout.stripe.test/cs_test_1"}, calls, [])
    _patch_wallet_balance(monkeypatch, Decimal("20.00"))

    response = TestClient(app).post(
        "/create-checkout",
        json={"items": ITEMS, "wallet_discount": "50.00"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Insufficient wallet balance"}
    assert calls == []


def test_create_checkout_rejects_discount_without_wallet(monkeypatch, auth_headers) -> None:
    calls: list[dict[str, object]] = []
    _patch_checkout(monkeypatch, {"id": "cs_test_1", "url": "https://checkout.stripe.test/cs_test_1"}, calls, [])
    _patch_wallet_balance(monkeypatch, None)

    response = TestClient(app).post(
        "/create-checkout",
        json={"items": ITEMS, "wallet_discount": "10.00"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert calls == []


def test_create_checkout_maps_cart_and_stripe_errors(monkeypatch, auth_headers) -> None:
    _patch_checkout(monkeypatch, EmptyCartError("empty cart"), [], [])
    rejected = TestClient(app).post("/create-checkout", json={"items": ITEMS}, headers=auth_headers)

    _patch_checkout(monkeypatch, StripeError("card declined"), [], [])
    failed = TestClient(app).post("/create-checkout", json={"items": ITEMS}, headers=auth_headers)

    assert rejected.status_code == 400
    assert failed.status_code == 500
    assert failed.json() == {"error": "card declined"}


def test_pix_code_lookup() -> None:
    client = TestClient(app)

    found = client.get("/pix/1_pote")
    missing = client.get("/pix/3_potes")

    assert found.status_code == 200
    assert found.json() == {"kit": "1_pote", "pix_code": "00020126PIX1"}
    assert missing.status_code == 404
    assert missing.json() == {"detail": {"code": "E_PIX_KIT_NOT_FOUND"}}


def test_create_reservation_stores_and_notifies(monkeypatch) -> None:
    created: list[dict[str, object]] = []
    emails: list[dict[str, object]] = []

    async def fake_create(session, **kwargs):  # noqa: ARG001
        created.append(kwargs)
        return Reservation(
            id=uuid4(),
            name=kwargs["name"],
            phone=kwargs["phone"],
            email=kwargs["email"],
            product_title=kwargs["product_title"],
            amount=kwargs["amount"] or Decimal("150.00"),
            user_id=kwargs["user_id"],
            created_at=kwargs["now_utc"],
        )

    async def fake_send_admin_email(**kwargs) -> bool:
        emails.append(kwargs)
        return True

    monkeypatch.setattr(checkout_routes.ReservationService, "create", staticmethod(fake_create))
    monkeypatch.setattr(checkout_routes, "send_admin_email", fake_send_admin_email)

    response = TestClient(app).post(
        "/create-reservation",
        json={
            "name": " Ana Souza ",
            "phone": "11987654321",
            "email": "ana@example.com",
            "product_title": "LeveFit 3 Potes",
        },
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert created[0]["name"] == "Ana Souza"
    assert created[0]["user_id"] is None
    assert emails[0]["event"] == "reservation_created"
    assert "LeveFit 3 Potes" in emails[0]["subject"]
    assert "(11) 98765-4321" in emails[0]["html"]
