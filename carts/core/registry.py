"""Cart registry: implements CartRegistryPort with an in-memory map.

Carts are created lazily on first access and live until explicitly
invalidated. There is no expiry timer; callers invalidate on checkout
or session expiry.
"""

import logging
from decimal import Decimal

from .errors import InvalidArgumentError, MissingArgumentError
from .models import Cart, RegistryStats, exact_sum
from .ports import CartRegistryPort

logger = logging.getLogger(__name__)

DEFAULT_TICKET_PLACES = 2


class CartRegistry(CartRegistryPort):
    """Core implementation of CartRegistryPort.

    Each instance owns its own map of customer id to Cart; nothing is
    shared between instances.
    """

    def __init__(self, ticket_places: int = DEFAULT_TICKET_PLACES):
        """Initialize an empty registry.

        Args:
            ticket_places: Decimal places the average ticket is rounded to.

        Raises:
            InvalidArgumentError: If ticket_places is negative.
        """
        if isinstance(ticket_places, bool) or not isinstance(ticket_places, int):
            raise InvalidArgumentError(
                f"ticket_places must be an int, got {ticket_places!r}"
            )
        if ticket_places < 0:
            raise InvalidArgumentError(
                f"ticket_places must be non-negative, got {ticket_places}"
            )
        self.ticket_places = ticket_places
        self._carts: dict[str, Cart] = {}

    def create(self, customer_id: str) -> Cart:
        """Return the customer's cart, creating an empty one if needed."""
        _check_customer_id(customer_id)

        cart = self._carts.get(customer_id)
        if cart is not None:
            return cart

        cart = Cart()
        self._carts[customer_id] = cart
        logger.info(
            f"Created cart for customer {customer_id}",
            extra={"customer_id": customer_id, "total_carts": len(self._carts)},
        )
        return cart

    def get(self, customer_id: str) -> Cart | None:
        """Return the customer's cart, or None if there is none."""
        _check_customer_id(customer_id)
        return self._carts.get(customer_id)

    def invalidate(self, customer_id: str) -> bool:
        """Remove the customer's cart.

        Returns:
            True if a cart was removed, False otherwise.
        """
        _check_customer_id(customer_id)

        cart = self._carts.pop(customer_id, None)
        if cart is None:
            return False

        logger.info(
            f"Invalidated cart for customer {customer_id}",
            extra={
                "customer_id": customer_id,
                "cart_total": str(cart.total_value()),
                "total_carts": len(self._carts),
            },
        )
        return True

    def average_ticket(self) -> Decimal:
        """Average cart total, rounded half-up to ``ticket_places``.

        Empty carts count towards the number of carts.
        """
        if not self._carts:
            return Decimal(f"0e-{self.ticket_places}")

        total = exact_sum(cart.total_value() for cart in self._carts.values())
        return round_half_up(total, len(self._carts), self.ticket_places)

    def get_stats(self) -> RegistryStats:
        """Return statistics about all registered carts."""
        carts = list(self._carts.values())
        return RegistryStats(
            total_carts=len(carts),
            empty_carts=sum(1 for cart in carts if cart.is_empty()),
            total_items=sum(cart.item_count() for cart in carts),
            total_value=exact_sum(cart.total_value() for cart in carts),
            average_ticket=self.average_ticket(),
        )

    def customer_ids(self) -> tuple[str, ...]:
        """Customer ids with a registered cart, in creation order."""
        return tuple(self._carts)

    def __contains__(self, customer_id: object) -> bool:
        return customer_id in self._carts

    def __len__(self) -> int:
        return len(self._carts)


def _check_customer_id(customer_id: str) -> None:
    if customer_id is None:
        raise MissingArgumentError("customer_id must not be None")
    if not isinstance(customer_id, str) or not customer_id.strip():
        raise InvalidArgumentError(
            f"customer_id must be a non-empty string, got {customer_id!r}"
        )


def round_half_up(total: Decimal, count: int, places: int) -> Decimal:
    """Divide a non-negative total by count, rounding half-up to ``places``.

    The quotient is computed on the exact integer ratio of ``total``, so
    rounding happens once regardless of magnitude or scale.
    """
    numerator, denominator = total.as_integer_ratio()
    denominator *= count
    quotient, remainder = divmod(numerator * 10**places, denominator)
    if 2 * remainder >= denominator:
        quotient += 1
    return Decimal(f"{quotient}e-{places}")
