from levefit.db.repo.affiliates_repo import AffiliatesRepo
from levefit.db.repo.habits_repo import HabitsRepo
from levefit.db.repo.orders_repo import OrdersRepo
from levefit.db.repo.profiles_repo import ProfilesRepo
from levefit.db.repo.push_subscriptions_repo import PushSubscriptionsRepo
from levefit.db.repo.wallet_transactions_repo import WalletTransactionsRepo
from levefit.db.repo.wallets_repo import WalletsRepo

__all__ = [
    "AffiliatesRepo",
    "HabitsRepo",
    "OrdersRepo",
    "ProfilesRepo",
    "PushSubscriptionsRepo",
    "WalletTransactionsRepo",
    "WalletsRepo",
]
