from levefit.workers.tasks.milestone_notifications import run_milestone_notifications
from levefit.workers.tasks.reminders import run_push_reminder
from levefit.workers.tasks.wallet_expiration import run_wallet_expiration

__all__ = [
    "run_milestone_notifications",
    "run_push_reminder",
    "run_wallet_expiration",
]
