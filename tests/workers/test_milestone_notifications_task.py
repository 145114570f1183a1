import asyncio
from uuid import uuid4

from levefit.economy.notifications.service import MilestoneBatchResult
from levefit.workers.celery_app import celery_app
from levefit.workers.tasks import milestone_notifications, milestone_notifications_async


def test_run_milestone_notifications_task_wrapper(monkeypatch) -> None:
    async def fake_async(*, batch_size: int) -> dict[str, object]:
        return {"date": "2026-03-07", "users_matched": batch_size, "sent_total": 2, "skipped_total": 0}

    monkeypatch.setattr(milestone_notifications, "run_milestone_notifications_async", fake_async)

    result = milestone_notifications.run_milestone_notifications(batch_size=7)
    assert result["users_matched"] == 7
    assert result["sent_total"] == 2


def test_milestone_notifications_are_scheduled_daily() -> None:
    entry = celery_app.conf.beat_schedule["milestone-notifications-daily"]

    assert entry["task"] == "levefit.workers.tasks.milestone_notifications.run_milestone_notifications"


def test_milestone_notifications_page_through_users(monkeypatch, fake_session_local) -> None:
    first_last, second_last = uuid4(), uuid4()
    pages = [
        MilestoneBatchResult(users_matched=3, sent=2, skipped=1, last_user_id=first_last),
        MilestoneBatchResult(users_matched=1, sent=1, skipped=0, last_user_id=second_last),
        MilestoneBatchResult(users_matched=0, sent=0, skipped=0, last_user_id=None),
    ]
    cursors: list[object] = []

    async def fake_send_milestone_batch(session, *, today, now_utc, after_user_id, batch_size):  # noqa: ARG001
        cursors.append(after_user_id)
        assert batch_size == 3
        return pages.pop(0)

    monkeypatch.setattr(milestone_notifications_async, "SessionLocal", fake_session_local)
    monkeypatch.setattr(
        milestone_notifications_async.NotificationService,
        "send_milestone_batch",
        staticmethod(fake_send_milestone_batch),
    )

    result = asyncio.run(milestone_notifications_async.run_milestone_notifications_async(batch_size=3))

    assert cursors == [None, first_last, second_last]
    assert result["users_matched"] == 4
    assert result["sent_total"] == 3
    assert result["skipped_total"] == 1
