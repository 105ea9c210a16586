"""Domain models for the cart system.

All models in this module use only Python standard library types.
Monetary values are always ``decimal.Decimal``; binary floating point
is rejected at the boundary so sums and rounding stay exact.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal, InvalidOperation, localcontext

from .errors import InvalidArgumentError, InvalidQuantityError, MissingArgumentError

logger = logging.getLogger(__name__)

# Accepted input types for a unit price; always stored as Decimal.
PriceInput = Decimal | int | str

# Addition and multiplication are exact in this context. Never divide in it:
# an inexact quotient would expand to MAX_PREC digits.
EXACT_CONTEXT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)


def exact_sum(values: Iterable[Decimal]) -> Decimal:
    """Sum Decimals without rounding, whatever their magnitude."""
    with localcontext(EXACT_CONTEXT):
        return sum(values, Decimal("0"))


def to_price(unit_price: PriceInput) -> Decimal:
    """Convert a caller-supplied unit price into a non-negative Decimal.

    Args:
        unit_price: Decimal, int, or decimal string such as "19.90".

    Returns:
        The price as a finite, non-negative Decimal.

    Raises:
        MissingArgumentError: If unit_price is None.
        InvalidArgumentError: If unit_price is a float, not a number,
            or negative.
    """
    if unit_price is None:
        raise MissingArgumentError("unit_price must not be None")
    if isinstance(unit_price, (bool, float)):
        raise InvalidArgumentError(
            f"unit_price must be a Decimal, int or str, got {type(unit_price).__name__}"
        )
    if isinstance(unit_price, Decimal):
        price = unit_price
    elif isinstance(unit_price, (int, str)):
        try:
            price = Decimal(unit_price)
        except InvalidOperation as e:
            raise InvalidArgumentError(f"Invalid unit_price: {unit_price!r}") from e
    else:
        raise InvalidArgumentError(
            f"unit_price must be a Decimal, int or str, got {type(unit_price).__name__}"
        )

    if not price.is_finite():
        raise InvalidArgumentError(f"unit_price must be finite, got {price}")
    if price < 0:
        raise InvalidArgumentError(f"unit_price must be non-negative, got {price}")
    return price


def check_quantity(quantity: int) -> int:
    """Ensure quantity is a positive int (bool is not accepted)."""
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidQuantityError(f"Invalid quantity: {quantity!r}")
    if quantity <= 0:
        raise InvalidQuantityError(f"Invalid quantity: {quantity}")
    return quantity


@dataclass(frozen=True)
class Product:
    """A sellable product, identified by its numeric code.

    Equality and hashing use ``code`` only; two products with the same
    code and different descriptions are the same product.
    """

    code: int
    description: str = field(compare=False)

    def __post_init__(self) -> None:
        """Validate product invariants on creation."""
        if self.code is None:
            raise MissingArgumentError("code must not be None")
        if isinstance(self.code, bool) or not isinstance(self.code, int):
            raise InvalidArgumentError(
                f"code must be an int, got {type(self.code).__name__}"
            )
        if not isinstance(self.description, str):
            raise InvalidArgumentError(
                f"description must be a str, got {type(self.description).__name__}"
            )


@dataclass
class LineItem:
    """Quantity and unit price of one product within a cart.

    Mutable so the owning cart can merge repeated additions in place.
    Carts only ever hand out copies.
    """

    product: Product
    unit_price: Decimal
    quantity: int

    def __post_init__(self) -> None:
        """Validate line item invariants and normalize the price."""
        _check_product(self.product)
        self.unit_price = to_price(self.unit_price)
        check_quantity(self.quantity)

    @property
    def total(self) -> Decimal:
        """unit_price multiplied by quantity."""
        with localcontext(EXACT_CONTEXT):
            return self.unit_price * self.quantity


def _check_product(product: Product) -> None:
    if product is None:
        raise MissingArgumentError("product must not be None")
    if not isinstance(product, Product):
        raise InvalidArgumentError(
            f"product must be a Product, got {type(product).__name__}"
        )


class Cart:
    """Ordered collection of line items for a single customer.

    At most one line exists per product code. Adding a product that is
    already in the cart adds to its quantity and takes the latest unit
    price; lines keep their original insertion position.
    """

    def __init__(self) -> None:
        self._items: list[LineItem] = []

    def add_item(self, product: Product, unit_price: PriceInput, quantity: int) -> None:
        """Add a product to the cart, merging with an existing line.

        Validation happens before any mutation, so a failed call leaves
        the cart exactly as it was.

        Args:
            product: Product to add.
            unit_price: Price per unit; Decimal, int or decimal string.
            quantity: Number of units, must be positive.

        Raises:
            InvalidQuantityError: If quantity is not a positive int.
            MissingArgumentError: If product or unit_price is None.
            InvalidArgumentError: If product is not a Product or the
                price is a float, not a number, or negative.
        """
        check_quantity(quantity)
        _check_product(product)
        price = to_price(unit_price)

        index = self._index_of(product)
        if index is None:
            self._items.append(LineItem(product=product, unit_price=price, quantity=quantity))
            logger.debug(
                f"Added product {product.code} to cart",
                extra={"product_code": product.code, "quantity": quantity},
            )
            return

        item = self._items[index]
        item.quantity += quantity
        # Decimal value comparison: 10.0 and 10.00 are the same price
        if item.unit_price != price:
            item.unit_price = price
        logger.debug(
            f"Merged product {product.code} into existing line",
            extra={
                "product_code": product.code,
                "quantity": item.quantity,
                "unit_price": str(item.unit_price),
            },
        )

    def remove_item(self, product: Product) -> bool:
        """Remove the line for a product.

        Returns:
            True if a line was removed, False if the product was not in
            the cart (the cart is left unchanged).

        Raises:
            MissingArgumentError: If product is None.
            InvalidArgumentError: If product is not a Product.
        """
        _check_product(product)

        index = self._index_of(product)
        if index is None:
            return False

        del self._items[index]
        logger.debug(
            f"Removed product {product.code} from cart",
            extra={"product_code": product.code},
        )
        return True

    def remove_item_at(self, position: int) -> LineItem:
        """Remove the line at a zero-based position in insertion order.

        Returns:
            The removed line item.

        Raises:
            InvalidArgumentError: If position is not an int or is outside
                ``0 <= position < len(cart)``.
        """
        if isinstance(position, bool) or not isinstance(position, int):
            raise InvalidArgumentError(f"position must be an int, got {position!r}")
        if position < 0 or position >= len(self._items):
            raise InvalidArgumentError(
                f"position {position} out of range for cart with {len(self._items)} items"
            )

        removed = self._items.pop(position)
        logger.debug(
            f"Removed line at position {position}",
            extra={"position": position, "product_code": removed.product.code},
        )
        return removed

    def total_value(self) -> Decimal:
        """Exact sum of line totals; Decimal("0") for an empty cart."""
        return exact_sum(item.total for item in self._items)

    def items(self) -> tuple[LineItem, ...]:
        """Snapshot of the cart lines in insertion order.

        The returned line items are copies; changing them does not
        affect the cart.
        """
        return tuple(replace(item) for item in self._items)

    def get_item(self, product: Product) -> LineItem | None:
        """Copy of the line for a product, or None if absent."""
        _check_product(product)
        index = self._index_of(product)
        if index is None:
            return None
        return replace(self._items[index])

    def item_count(self) -> int:
        """Total number of units across all lines."""
        return sum(item.quantity for item in self._items)

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Cart(lines={len(self._items)}, total={self.total_value()})"

    def _index_of(self, product: Product) -> int | None:
        for index, item in enumerate(self._items):
            if item.product.code == product.code:
                return index
        return None


@dataclass(frozen=True)
class RegistryStats:
    """Point-in-time statistics about the carts in a registry."""

    total_carts: int
    empty_carts: int
    total_items: int  # units across all carts
    total_value: Decimal
    average_ticket: Decimal
