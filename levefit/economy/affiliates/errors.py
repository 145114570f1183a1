class AffiliateError(Exception):
    pass


class AffiliateNotFoundError(AffiliateError):
    pass


class AffiliateCodeGenerationError(AffiliateError):
    pass


class WithdrawalValidationError(AffiliateError):
    pass


class WithdrawalBelowMinimumError(WithdrawalValidationError):
    pass


class WithdrawalExceedsBalanceError(WithdrawalValidationError):
    pass


class WithdrawalAlreadyPendingError(WithdrawalValidationError):
    pass


class WithdrawalNotFoundError(AffiliateError):
    pass


class WithdrawalTransitionError(AffiliateError):
    pass
