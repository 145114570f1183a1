from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from levefit.api.routes import admin as admin_routes
from levefit.db.models.profiles import Profile
from levefit.db.models.referrals import Referral
from levefit.db.repo.user_roles_repo import UserRolesRepo
from levefit.economy.habits.errors import ProfileNotFoundError
from levefit.economy.wallet.errors import (
    ReferralAlreadyApprovedError,
    ReferralCodeNotFoundError,
    ReferralNotFoundError,
)
from levefit.economy.wallet.types import ReferralApprovalResult
from levefit.main import app

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def admin_env(monkeypatch: pytest.MonkeyPatch, fake_session_local) -> None:
    monkeypatch.setattr(admin_routes, "SessionLocal", fake_session_local)
    _patch_role(monkeypatch, True)


def _patch_role(monkeypatch: pytest.MonkeyPatch, is_admin: bool) -> None:
    async def fake_has_role(session, *, user_id, role):  # noqa: ARG001
        return is_admin and role == "admin"

    monkeypatch.setattr(UserRolesRepo, "has_role", staticmethod(fake_has_role))


def _patch_approve_referral(monkeypatch: pytest.MonkeyPatch, outcome: object) -> list[dict[str, object]]:
    calls: list[dict[str, object]] = []

    async def fake_approve(session, **kwargs):  # noqa: ARG001
        calls.append(kwargs)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(admin_routes.WalletService, "approve_referral", staticmethod(fake_approve))
    return calls


def test_admin_routes_require_admin_role(monkeypatch, auth_headers) -> None:
    _patch_role(monkeypatch, False)
    calls = _patch_approve_referral(monkeypatch, ReferralNotFoundError())
    client = TestClient(app)

    referral = client.post(f"/admin/referrals/{uuid4()}/approve", headers=auth_headers)
    profile = client.post(f"/admin/profiles/{uuid4()}/approve", headers=auth_headers)

    assert referral.status_code == 403
    assert referral.json() == {"detail": {"code": "E_FORBIDDEN"}}
    assert profile.status_code == 403
    assert calls == []


def test_approve_referral_credits_referrer(monkeypatch, auth_headers) -> None:
    referral_id = uuid4()
    referrer_id = uuid4()
    calls = _patch_approve_referral(
        monkeypatch,
        ReferralApprovalResult(
            referral_id=referral_id,
            referrer_id=referrer_id,
            credit_amount=Decimal("25.00"),
            new_balance=Decimal("75.00"),
        ),
    )

    response = TestClient(app).post(f"/admin/referrals/{referral_id}/approve", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {
        "referral_id": str(referral_id),
        "referrer_id": str(referrer_id),
        "credit_amount": 25.0,
        "new_balance": 75.0,
    }
    assert calls[0]["referral_id"] == referral_id


@pytest.mark.parametrize(
    ("error", "status_code", "code"),
    [
        (ReferralNotFoundError(), 404, "E_REFERRAL_NOT_FOUND"),
        (ReferralAlreadyApprovedError(), 409, "E_REFERRAL_ALREADY_APPROVED"),
    ],
)
def test_approve_referral_maps_errors(monkeypatch, auth_headers, error, status_code, code) -> None:
    _patch_approve_referral(monkeypatch, error)

    response = TestClient(app).post(f"/admin/referrals/{uuid4()}/approve", headers=auth_headers)

    assert response.status_code == status_code
    assert response.json() == {"detail": {"code": code}}


def test_register_conversion_returns_converted_referral(monkeypatch, auth_headers) -> None:
    referrer_id = uuid4()
    calls: list[dict[str, object]] = []

    async def fake_register(session, **kwargs):  # noqa: ARG001
        calls.append(kwargs)
        return Referral(
            id=uuid4(),
            referrer_id=referrer_id,
            referral_code="LFABC234",
            referred_email=kwargs["referred_email"],
            kiwify_order_id=kwargs["kiwify_order_id"],
            status="converted",
            credit_amount=Decimal("25.00"),
            created_at=NOW,
        )

    monkeypatch.setattr(admin_routes.WalletService, "register_conversion", staticmethod(fake_register))

    response = TestClient(app).post(
        "/admin/referrals",
        json={"referral_code": "lfabc234", "referred_email": "bia@example.com", "kiwify_order_id": ""},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "converted"
    assert body["referrer_id"] == str(referrer_id)
    assert body["credit_amount"] == 25.0
    assert calls[0]["kiwify_order_id"] is None


def test_register_conversion_unknown_code(monkeypatch, auth_headers) -> None:
    async def fake_register(session, **kwargs):  # noqa: ARG001
        raise ReferralCodeNotFoundError

    monkeypatch.setattr(admin_routes.WalletService, "register_conversion", staticmethod(fake_register))

    response = TestClient(app).post("/admin/referrals", json={"referral_code": "LFNOPE22"}, headers=auth_headers)

    assert response.status_code == 404
    assert response.json() == {"detail": {"code": "E_REFERRAL_CODE_NOT_FOUND"}}


def test_approve_profile(monkeypatch, auth_headers) -> None:
    target_user_id = uuid4()

    async def fake_approve_profile(session, *, user_id, now_utc):  # noqa: ARG001
        return Profile(user_id=user_id, name="Ana", is_approved=True, state_version=3)

    monkeypatch.setattr(admin_routes.HabitsService, "approve_profile", staticmethod(fake_approve_profile))

    response = TestClient(app).post(f"/admin/profiles/{target_user_id}/approve", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"user_id": str(target_user_id), "is_approved": True, "state_version": 3}


def test_approve_missing_profile(monkeypatch, auth_headers) -> None:
    async def fake_approve_profile(session, *, user_id, now_utc):  # noqa: ARG001
        raise ProfileNotFoundError

    monkeypatch.setattr(admin_routes.HabitsService, "approve_profile", staticmethod(fake_approve_profile))

    response = TestClient(app).post(f"/admin/profiles/{uuid4()}/approve", headers=auth_headers)

    assert response.status_code == 404
    assert response.json() == {"detail": {"code": "E_PROFILE_NOT_FOUND"}}
