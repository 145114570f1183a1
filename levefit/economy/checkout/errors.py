class CheckoutError(Exception):
    pass


class EmptyCartError(CheckoutError):
    pass


class InvalidCartItemError(CheckoutError):
    pass


class InvalidWalletDiscountError(CheckoutError):
    pass


class PixCodeNotFoundError(CheckoutError):
    pass


class WalletDiscountUnavailableError(CheckoutError):
    pass
