from __future__ import annotations


class DomainError(Exception):
    """Base for store domain errors."""


class NotAuthenticatedError(DomainError):
    """No valid customer behind the request."""


class InvalidCredentialsError(DomainError):
    """Username or password did not match."""


class UsernameAlreadyExistsError(DomainError):
    """Username is taken by another customer."""


class ForbiddenError(DomainError):
    """Authenticated customer does not own the resource."""


class NotFoundError(DomainError):
    """Referenced record does not exist."""


class GameNotFoundError(NotFoundError):
    """Game is not in the catalog."""


class PurchaseNotFoundError(NotFoundError):
    """Purchase does not exist."""


class InvalidProductError(DomainError):
    """Cart operation referenced a game that is not in the catalog."""


class InvalidQuantityError(DomainError):
    """Cart quantity must be a positive integer."""


class EmptyCartError(DomainError):
    """Checkout was requested with nothing in the cart."""


class StorageFailureError(DomainError):
    """Transaction or connection failure; nothing was applied."""

    def __init__(self, message: str, *, retryable: bool = False):
        super().__init__(message)
        self.retryable = retryable
