from __future__ import annotations

from datetime import date

from levefit.economy.notifications.constants import (
    CAPSULE_BODY,
    CAPSULE_TITLE,
    DAILY_SUMMARY_BODY,
    DAILY_SUMMARY_FALLBACK_NAME,
    DAILY_SUMMARY_TITLE,
    MILESTONE_NOTIFICATIONS,
    TEST_BODY,
    TEST_TITLE,
    TREATMENT_END_BODY,
    TREATMENT_END_TITLE,
    WATER_BODY,
    WATER_TITLE,
)
from levefit.services.web_push import PushMessage


def milestone_message(*, treatment_day: int, today: date) -> PushMessage | None:
    template = MILESTONE_NOTIFICATIONS.get(treatment_day)
    if template is None:
        return None
    title, body = template
    return PushMessage(
        title=title,
        body=body,
        tag=f"levefit-milestone-day{treatment_day}-{today.isoformat()}",
    )


def test_message() -> PushMessage:
    return PushMessage(title=TEST_TITLE, body=TEST_BODY, tag="test-notification")


def capsule_message() -> PushMessage:
    return PushMessage(
        title=CAPSULE_TITLE,
        body=CAPSULE_BODY,
        tag="capsule-reminder",
        url="/calendar",
    )


def water_message() -> PushMessage:
    return PushMessage(title=WATER_TITLE, body=WATER_BODY, tag="water-reminder")


def treatment_end_message() -> PushMessage:
    return PushMessage(
        title=TREATMENT_END_TITLE,
        body=TREATMENT_END_BODY,
        tag="treatment-end-reminder",
    )


def daily_summary_message(
    *,
    name: str | None,
    treatment_day: int,
    capsule_days: int,
    water_percent: int,
    today: date,
) -> PushMessage:
    first_name = (name or "").split(" ")[0] or DAILY_SUMMARY_FALLBACK_NAME
    return PushMessage(
        title=DAILY_SUMMARY_TITLE.format(name=first_name),
        body=DAILY_SUMMARY_BODY.format(
            treatment_day=treatment_day,
            capsule_days=capsule_days,
            water_percent=water_percent,
        ),
        tag=f"levefit-daily-summary-{today.isoformat()}",
        url="/progress",
    )
