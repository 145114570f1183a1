from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from levefit.api.routes import wallet as wallet_routes
from levefit.economy.wallet.errors import (
    InsufficientBalanceError,
    InvalidAmountError,
    WalletNotFoundError,
)
from levefit.economy.wallet.types import (
    ReferralView,
    WalletDebitResult,
    WalletOverview,
    WalletTransactionView,
)
from levefit.main import app


@pytest.fixture(autouse=True)
def fake_session(monkeypatch: pytest.MonkeyPatch, fake_session_local) -> None:
    monkeypatch.setattr(wallet_routes, "SessionLocal", fake_session_local)


def _patch_pay(monkeypatch: pytest.MonkeyPatch, outcome: object, calls: list[dict[str, object]]) -> None:
    async def fake_pay_with_wallet(session, **kwargs):  # noqa: ARG001
        calls.append(kwargs)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(wallet_routes.WalletService, "pay_with_wallet", staticmethod(fake_pay_with_wallet))


def test_use_wallet_balance_requires_auth() -> None:
    response = TestClient(app).post("/use-wallet-balance", json={"amount": 10})

    assert response.status_code == 401
    assert response.json() == {"detail": {"code": "E_UNAUTHORIZED"}}


def test_use_wallet_balance_debits_wallet(monkeypatch, auth_headers, user_id) -> None:
    calls: list[dict[str, object]] = []
    _patch_pay(
        monkeypatch,
        WalletDebitResult(new_balance=Decimal("30.00"), transaction_id=uuid4()),
        calls,
    )

    response = TestClient(app).post(
        "/use-wallet-balance",
        json={"amount": "20.00", "product_title": "Kit 1 pote"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "new_balance": 30.0}
    assert calls[0]["user_id"] == user_id
    assert calls[0]["amount"] == Decimal("20.00")
    assert calls[0]["customer_email"] == "ana@example.com"


@pytest.mark.parametrize(
    ("error", "status_code", "message"),
    [
        (InvalidAmountError(), 400, "Invalid amount"),
        (InsufficientBalanceError(), 400, "Insufficient balance"),
        (WalletNotFoundError(), 404, "Wallet not found"),
        (RuntimeError("db down"), 500, "Internal server error"),
    ],
)
def test_use_wallet_balance_error_mapping(
    monkeypatch,
    auth_headers,
    error: Exception,
    status_code: int,
    message: str,
) -> None:
    _patch_pay(monkeypatch, error, [])

    response = TestClient(app).post("/use-wallet-balance", json={"amount": 10}, headers=auth_headers)

    assert response.status_code == status_code
    assert response.json() == {"error": message}


def test_get_wallet_returns_overview(monkeypatch, auth_headers) -> None:
    created_at = datetime(2026, 2, 1, 12, 0, tzinfo=timezone.utc)
    overview = WalletOverview(
        balance=Decimal("50.00"),
        referral_code="LFABC123",
        referral_link="https://leveday.com.br?utm_source=LFABC123",
        transactions=[
            WalletTransactionView(
                id=uuid4(),
                amount=Decimal("50.00"),
                type="credit",
                description="Indicação: friend@example.com",
                created_at=created_at,
            )
        ],
        referrals_by_status={
            "completed": [
                ReferralView(
                    id=uuid4(),
                    referred_email="friend@example.com",
                    status="completed",
                    credit_amount=Decimal("50.00"),
                    created_at=created_at,
                )
            ]
        },
    )

    async def fake_get_overview(session, **kwargs):  # noqa: ARG001
        return overview

    monkeypatch.setattr(wallet_routes.WalletService, "get_overview", staticmethod(fake_get_overview))

    response = TestClient(app).get("/wallet", headers=auth_headers)

    assert response.status_code == 200
    payload = response.json()
    assert payload["balance"] == 50.0
    assert payload["referral_code"] == "LFABC123"
    assert payload["transactions"][0]["type"] == "credit"
    assert payload["referrals_by_status"]["completed"][0]["credit_amount"] == 50.0
