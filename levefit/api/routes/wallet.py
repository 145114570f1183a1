from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from levefit.api.routes.request_auth import require_user
from levefit.db.session import SessionLocal
from levefit.economy.wallet.errors import (
    InsufficientBalanceError,
    InvalidAmountError,
    WalletNotFoundError,
)
from levefit.economy.wallet.service import WalletService

router = APIRouter(tags=["wallet"])
logger = structlog.get_logger(__name__)


class WalletTransactionResponse(BaseModel):
    id: str
    amount: float
    type: str
    description: str | None
    created_at: datetime


class ReferralResponse(BaseModel):
    id: str
    referred_email: str | None
    status: str
    credit_amount: float
    created_at: datetime


class WalletResponse(BaseModel):
    balance: float
    referral_code: str
    referral_link: str
    transactions: list[WalletTransactionResponse]
    referrals_by_status: dict[str, list[ReferralResponse]]


class UseWalletBalanceRequest(BaseModel):
    amount: Decimal
    product_title: str | None = Field(default=None, max_length=200)
    items: list[dict[str, Any]] | None = None


@router.get("/wallet", response_model=WalletResponse)
async def get_wallet(request: Request) -> WalletResponse:
    user = require_user(request)
    async with SessionLocal.begin() as session:
        overview = await WalletService.get_overview(
            session,
            user_id=user.user_id,
            now_utc=datetime.now(timezone.utc),
        )

    return WalletResponse(
        balance=float(overview.balance),
        referral_code=overview.referral_code,
        referral_link=overview.referral_link,
        transactions=[
            WalletTransactionResponse(
                id=str(item.id),
                amount=float(item.amount),
                type=item.type,
                description=item.description,
                created_at=item.created_at,
            )
            for item in overview.transactions
        ],
        referrals_by_status={
            status: [
                ReferralResponse(
                    id=str(item.id),
                    referred_email=item.referred_email,
                    status=item.status,
                    credit_amount=float(item.credit_amount),
                    created_at=item.created_at,
                )
                for item in referrals
            ]
            for status, referrals in overview.referrals_by_status.items()
        },
    )


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/use-wallet-balance")
async def use_wallet_balance(payload: UseWalletBalanceRequest, request: Request) -> JSONResponse:
    user = require_user(request)
    try:
        async with SessionLocal.begin() as session:
            result = await WalletService.pay_with_wallet(
                session,
                user_id=user.user_id,
                amount=payload.amount,
                product_title=payload.product_title,
                items=payload.items,
                customer_email=user.email,
                now_utc=datetime.now(timezone.utc),
            )
    except InvalidAmountError:
        return _error(400, "Invalid amount")
    except WalletNotFoundError:
        return _error(404, "Wallet not found")
    except InsufficientBalanceError:
        return _error(400, "Insufficient balance")
    except Exception:
        logger.exception("wallet_payment_failed", user_id=str(user.user_id))
        return _error(500, "Internal server error")

    logger.info(
        "wallet_payment_completed",
        user_id=str(user.user_id),
        amount=str(payload.amount),
        new_balance=str(result.new_balance),
    )
    return JSONResponse(
        status_code=200,
        content={"success": True, "new_balance": float(result.new_balance)},
    )
