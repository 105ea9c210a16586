"""Core domain logic for the cart system.

This package has zero external dependencies: products, line items,
carts, and the registry that maps customers to carts.
"""

from .errors import (
    CartError,
    InvalidArgumentError,
    InvalidQuantityError,
    MissingArgumentError,
)
from .models import Cart, LineItem, Product, RegistryStats
from .ports import CartRegistryPort
from .registry import CartRegistry

__all__ = [
    "Cart",
    "CartError",
    "CartRegistry",
    "CartRegistryPort",
    "InvalidArgumentError",
    "InvalidQuantityError",
    "LineItem",
    "MissingArgumentError",
    "Product",
    "RegistryStats",
]
