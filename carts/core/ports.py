"""Port interfaces for the cart system.

These abstract base classes define the boundary between the core
domain and whatever surrounds it (a web handler, a test harness).
Surrounding code depends on the port, never on the concrete registry.

Port Interface Categories:

1. **Driving Ports** (callers drive the core)
   - CartRegistryPort: create, look up and invalidate customer carts,
     and aggregate the average ticket
"""

from abc import ABC, abstractmethod
from decimal import Decimal

from .models import Cart, RegistryStats


# ============================================================================
# DRIVING PORTS (Callers drive the core)
# ============================================================================


class CartRegistryPort(ABC):
    """Port for managing one cart per customer.

    Implementations keep at most one cart per customer id. Two
    implementation instances never share carts.
    """

    @abstractmethod
    def create(self, customer_id: str) -> Cart:
        """Return the customer's cart, creating an empty one if needed.

        Args:
            customer_id: Identifier of the customer.

        Returns:
            The same Cart instance for every call with the same id,
            until the cart is invalidated.

        Raises:
            MissingArgumentError: If customer_id is None.
            InvalidArgumentError: If customer_id is not a non-empty string.
        """

    @abstractmethod
    def get(self, customer_id: str) -> Cart | None:
        """Return the customer's cart without creating one.

        Returns:
            The Cart, or None if the customer has no cart.
        """

    @abstractmethod
    def invalidate(self, customer_id: str) -> bool:
        """Discard the customer's cart after checkout or session expiry.

        Returns:
            True if a cart was removed, False if the customer had none.
        """

    @abstractmethod
    def average_ticket(self) -> Decimal:
        """Average cart total across all registered carts.

        Returns:
            Sum of cart totals divided by the number of carts, rounded
            half-up to the configured number of decimal places. Zero
            (at that scale) when no carts exist.
        """

    @abstractmethod
    def get_stats(self) -> RegistryStats:
        """Return point-in-time statistics about the registered carts."""
