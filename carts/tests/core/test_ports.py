"""Unit tests for port interface contracts.

Tests verify that the port abstract base class is properly defined
and that implementations must satisfy the interface contract.
"""

from decimal import Decimal

import pytest

from carts.core.models import Cart, RegistryStats
from carts.core.ports import CartRegistryPort


class SingleCartRegistry(CartRegistryPort):
    """Minimal implementation that serves every customer the same cart."""

    def __init__(self) -> None:
        self.cart = Cart()

    def create(self, customer_id: str) -> Cart:
        return self.cart

    def get(self, customer_id: str) -> Cart | None:
        return self.cart

    def invalidate(self, customer_id: str) -> bool:
        return False

    def average_ticket(self) -> Decimal:
        return self.cart.total_value()

    def get_stats(self) -> RegistryStats:
        return RegistryStats(
            total_carts=1,
            empty_carts=int(self.cart.is_empty()),
            total_items=self.cart.item_count(),
            total_value=self.cart.total_value(),
            average_ticket=self.average_ticket(),
        )


def test_port_cannot_be_instantiated() -> None:
    """CartRegistryPort is abstract."""
    with pytest.raises(TypeError):
        CartRegistryPort()  # type: ignore[abstract]


def test_incomplete_implementation_cannot_be_instantiated() -> None:
    """Every abstract method must be implemented."""

    class PartialRegistry(CartRegistryPort):
        def create(self, customer_id: str) -> Cart:
            return Cart()

    with pytest.raises(TypeError):
        PartialRegistry()  # type: ignore[abstract]


def test_complete_implementation_satisfies_port() -> None:
    registry = SingleCartRegistry()

    assert isinstance(registry, CartRegistryPort)
    assert registry.create("a") is registry.create("b")
    assert registry.get_stats().empty_carts == 1
