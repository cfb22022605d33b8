"""Errors raised by the store service.

Routers translate them into HTTP responses, see igra_store.routers.errors.
"""


class StoreError(Exception):
    pass


class NotFoundError(StoreError):
    """A referenced entity or the relation it needs (e.g. cart membership) is absent."""


class OutOfStockError(NotFoundError):
    """The catalog game has no license key left."""


class ConflictError(StoreError):
    """Login, nickname or license key already taken."""


class InvalidInputError(StoreError):
    pass


class InsufficientFundsError(StoreError):
    pass


class NotInCartError(StoreError):
    pass
