from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

from levefit.economy.notifications import messages
from levefit.economy.notifications.reminders import (
    is_capsule_reminder_due,
    is_treatment_ending,
    is_water_reminder_due,
)

UTC = timezone.utc


def test_capsule_reminder_window_is_five_minutes() -> None:
    capsule_time = time(8, 0)

    assert is_capsule_reminder_due(capsule_time=capsule_time, now_local=datetime(2026, 1, 5, 8, 5))
    assert is_capsule_reminder_due(capsule_time=capsule_time, now_local=datetime(2026, 1, 5, 7, 55))
    assert not is_capsule_reminder_due(capsule_time=capsule_time, now_local=datetime(2026, 1, 5, 8, 6))


def test_water_reminder_respects_interval() -> None:
    now_utc = datetime(2026, 1, 5, 15, 0, tzinfo=UTC)
    now_local = datetime(2026, 1, 5, 12, 0)

    assert is_water_reminder_due(
        interval_minutes=60,
        last_notification_utc=now_utc - timedelta(minutes=60),
        now_utc=now_utc,
        now_local=now_local,
    )
    assert not is_water_reminder_due(
        interval_minutes=60,
        last_notification_utc=now_utc - timedelta(minutes=59),
        now_utc=now_utc,
        now_local=now_local,
    )
    assert not is_water_reminder_due(
        interval_minutes=None,
        last_notification_utc=None,
        now_utc=now_utc,
        now_local=now_local,
    )


def test_first_water_reminder_only_during_the_day() -> None:
    now_utc = datetime(2026, 1, 5, 15, 0, tzinfo=UTC)

    assert is_water_reminder_due(
        interval_minutes=60,
        last_notification_utc=None,
        now_utc=now_utc,
        now_local=datetime(2026, 1, 5, 7, 0),
    )
    assert not is_water_reminder_due(
        interval_minutes=60,
        last_notification_utc=None,
        now_utc=now_utc,
        now_local=datetime(2026, 1, 5, 23, 0),
    )


def test_treatment_ending_window() -> None:
    start = date(2026, 3, 1)

    assert is_treatment_ending(start_date=start, kit_type="1_pote", today=date(2026, 3, 26))
    assert is_treatment_ending(start_date=start, kit_type="1_pote", today=date(2026, 3, 31))
    assert not is_treatment_ending(start_date=start, kit_type="1_pote", today=date(2026, 3, 25))
    assert not is_treatment_ending(start_date=start, kit_type="1_pote", today=date(2026, 4, 1))


def test_milestone_message_only_on_milestone_days() -> None:
    today = date(2026, 3, 7)

    message = messages.milestone_message(treatment_day=7, today=today)

    assert message is not None
    assert message.tag == "levefit-milestone-day7-2026-03-07"
    assert messages.milestone_message(treatment_day=8, today=today) is None


def test_daily_summary_uses_first_name_or_fallback() -> None:
    today = date(2026, 3, 7)

    named = messages.daily_summary_message(
        name="Ana Paula",
        treatment_day=7,
        capsule_days=6,
        water_percent=80,
        today=today,
    )
    anonymous = messages.daily_summary_message(
        name=None,
        treatment_day=7,
        capsule_days=6,
        water_percent=80,
        today=today,
    )

    assert "Ana!" in named.title
    assert "Usuária" in anonymous.title
    assert "Dia 7 de tratamento" in named.body
    assert named.to_payload()["data"]["url"] == "/progress"


def test_capsule_message_opens_calendar() -> None:
    payload = messages.capsule_message().to_payload()

    assert payload["data"]["url"] == "/calendar"
    assert payload["tag"] == "capsule-reminder"
