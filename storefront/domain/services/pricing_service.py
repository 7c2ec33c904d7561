# storefront/domain/services/pricing_service.py

"""
Price and stock rules shared by carts and wishlists.

A discounted price always wins over the regular one. A line that names
a variant is priced and stocked from the variant; the product only
fills in when the variant has no price of its own.
"""

from decimal import Decimal
from typing import Iterable, Optional, Tuple

from storefront.domain.exceptions import InvalidInputException

ZERO = Decimal("0.00")


def effective_price(price: Optional[Decimal], discount_price: Optional[Decimal]) -> Optional[Decimal]:
    return discount_price if discount_price is not None else price


def line_unit_price(product, variant=None) -> Decimal:
    """
    Unit price of a cart or wishlist line.

    ``product`` and ``variant`` only need ``price`` and ``discount_price``.
    """
    product_price = effective_price(product.price, product.discount_price)
    if variant is not None:
        variant_price = effective_price(variant.price, variant.discount_price)
        if variant_price is not None:
            return variant_price
    return product_price if product_price is not None else ZERO


def available_stock(product, variant=None) -> int:
    source = variant if variant is not None else product
    return source.quantity or 0


def ensure_in_stock(product, variant, requested: int) -> None:
    """
    Raises:
        InvalidInputException: fewer than ``requested`` units are available
    """
    available = available_stock(product, variant)
    if requested > available:
        subject = f"variant {variant.sku}" if variant is not None else f"product {product.name}"
        raise InvalidInputException(
            detail=f"Not enough stock for {subject}. Available: {available}",
            fields={"quantity": f"at most {available} available"},
        )


def totals(lines: Iterable[Tuple[Decimal, int]]) -> Tuple[int, Decimal]:
    """Sum ``(unit_price, quantity)`` pairs into (item count, total price)."""
    count, total = 0, ZERO
    for unit_price, quantity in lines:
        count += quantity
        total += unit_price * quantity
    return count, total
