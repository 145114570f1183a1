class WalletError(Exception):
    pass


class WalletNotFoundError(WalletError):
    pass


class InvalidAmountError(WalletError):
    pass


class InsufficientBalanceError(WalletError):
    pass


class ReferralCodeNotFoundError(WalletError):
    pass


class ReferralCodeGenerationError(WalletError):
    pass


class ReferralNotFoundError(WalletError):
    pass


class ReferralAlreadyApprovedError(WalletError):
    pass


class DuplicateReferralOrderError(WalletError):
    pass
