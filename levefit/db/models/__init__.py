from levefit.db.models.affiliate_sales import AffiliateSale
from levefit.db.models.affiliates import Affiliate
from levefit.db.models.capsule_days import CapsuleDay
from levefit.db.models.completed_items import CompletedDetox, CompletedExercise, CompletedRecipe
from levefit.db.models.milestone_push_logs import MilestonePushLog
from levefit.db.models.notification_settings import NotificationSettings
from levefit.db.models.orders import Order
from levefit.db.models.pix_withdrawals import PixWithdrawal
from levefit.db.models.points_history import PointsHistory
from levefit.db.models.profiles import Profile
from levefit.db.models.push_subscriptions import PushSubscription
from levefit.db.models.redeemed_rewards import RedeemedReward
from levefit.db.models.referrals import Referral
from levefit.db.models.reservations import Reservation
from levefit.db.models.rewards import Reward
from levefit.db.models.user_points import UserPoints
from levefit.db.models.user_roles import UserRole
from levefit.db.models.wallet_transactions import WalletTransaction
from levefit.db.models.wallets import Wallet
from levefit.db.models.water_intake_history import WaterIntakeDay

__all__ = [
    "Affiliate",
    "AffiliateSale",
    "CapsuleDay",
    "CompletedDetox",
    "CompletedExercise",
    "CompletedRecipe",
    "MilestonePushLog",
    "NotificationSettings",
    "Order",
    "PixWithdrawal",
    "PointsHistory",
    "Profile",
    "PushSubscription",
    "RedeemedReward",
    "Referral",
    "Reservation",
    "Reward",
    "UserPoints",
    "UserRole",
    "Wallet",
    "WalletTransaction",
    "WaterIntakeDay",
]
