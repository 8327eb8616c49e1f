"""Cart selectors: pure read-side derivations over a ``CartSnapshot``.

Nothing here is stored; callers recompute whenever the snapshot or the
product of interest changes.
"""

from __future__ import annotations

from decimal import ROUND_CEILING, Decimal

import structlog

from storefront.modules.cart.dtos import CartMembership, CartSnapshot, CartSummary

logger = structlog.get_logger(__name__)


def find_cart_line(snapshot: CartSnapshot, product_id: str) -> CartMembership:
    """Return whether ``product_id`` is in the cart and which line holds it.

    A well-formed snapshot has at most one line per product.  If the
    server returns duplicates the first line wins and the anomaly is
    logged.
    """
    matches = [line for line in snapshot.lines if line.product_id == product_id]
    if not matches:
        return CartMembership(is_present=False, line=None)
    if len(matches) > 1:
        logger.warning(
            "cart.duplicate_product_lines",
            product_id=product_id,
            line_ids=[line.line_id for line in matches],
        )
    return CartMembership(is_present=True, line=matches[0])


def price_with_discount(price: Decimal, discount: Decimal) -> Decimal:
    """Unit price after a percentage discount, rounding the discount up."""
    discount_amount = (price * discount / Decimal(100)).to_integral_value(
        rounding=ROUND_CEILING
    )
    return price - discount_amount


def summarize_cart(snapshot: CartSnapshot) -> CartSummary:
    total_quantity = 0
    total_price = Decimal("0")
    total_discounted = Decimal("0")
    for line in snapshot.lines:
        total_quantity += line.quantity
        if line.product is None:
            continue
        total_price += line.product.price * line.quantity
        total_discounted += (
            price_with_discount(line.product.price, line.product.discount)
            * line.quantity
        )
    return CartSummary(
        total_quantity=total_quantity,
        total_price=total_price,
        total_discounted_price=total_discounted,
    )
