"""Invoice view of an order."""

from __future__ import annotations

from typing import Optional, Tuple

from storefront.modules.orders.constants import INVOICE_PREFIX, NOT_AVAILABLE
from storefront.modules.orders.dtos import DeliveryAddressDTO, InvoiceDTO, Order


def build_invoice(order: Order) -> InvoiceDTO:
    """Build the invoice shown for ``order``; missing details read "N/A"."""
    cancellation_note = None
    if order.is_cancelled and order.cancellation_date is not None:
        cancellation_note = (
            f"Cancelled: {order.cancellation_reason} "
            f"on {order.cancellation_date:%Y-%m-%d}"
        )
    return InvoiceDTO(
        invoice_number=f"{INVOICE_PREFIX}-{order.order_id}",
        order_id=order.order_id,
        order_date=order.created_at,
        customer_name=order.owner_name or NOT_AVAILABLE,
        customer_email=order.owner_email or NOT_AVAILABLE,
        address_lines=address_lines(order.delivery_address),
        product_name=order.product_details.name or NOT_AVAILABLE,
        amount=order.total_amount,
        payment_status=order.payment_status or NOT_AVAILABLE,
        cancellation_note=cancellation_note,
    )


def address_lines(address: Optional[DeliveryAddressDTO]) -> Tuple[str, ...]:
    if address is None:
        return (NOT_AVAILABLE,)
    city_state = ", ".join(part for part in (address.city, address.state) if part)
    lines = (
        address.address_line,
        city_state,
        address.country,
        f"PIN {address.pincode}" if address.pincode else None,
        f"Mobile {address.mobile}" if address.mobile else None,
    )
    return tuple(line for line in lines if line) or (NOT_AVAILABLE,)
