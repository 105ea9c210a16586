"""Exceptions raised by the cart domain.

Every error is raised synchronously at the call site and leaves the
cart or registry untouched. Each concrete error also derives from the
matching builtin so callers can catch ``ValueError`` or ``TypeError``.
"""


class CartError(Exception):
    """Base class for all cart domain errors."""


class InvalidQuantityError(CartError, ValueError):
    """Raised when a line item quantity is not a positive integer."""


class InvalidArgumentError(CartError, ValueError):
    """Raised for out-of-range positions, bad prices or bad customer ids."""


class MissingArgumentError(CartError, TypeError):
    """Raised when a required argument is None."""


__all__ = [
    "CartError",
    "InvalidArgumentError",
    "InvalidQuantityError",
    "MissingArgumentError",
]
