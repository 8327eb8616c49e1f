"""Unit tests for the invoice view of an order."""

from __future__ import annotations

from decimal import Decimal

import pytest

from storefront.modules.orders.dtos import Order
from storefront.modules.orders.invoices import address_lines, build_invoice

pytestmark = pytest.mark.unit


def test_invoice_for_placed_order(order_factory):
    invoice = build_invoice(Order.model_validate(order_factory("s-1", "ORD-1")))

    assert invoice.invoice_number == "INV-ORD-1"
    assert invoice.order_id == "ORD-1"
    assert invoice.customer_name == "Asha Rao"
    assert invoice.customer_email == "asha@example.com"
    assert invoice.product_name == "Cotton Kurta"
    assert invoice.amount == Decimal("1499")
    assert invoice.payment_status == "CASH ON DELIVERY"
    assert invoice.cancellation_note is None
    assert invoice.address_lines == (
        "12 MG Road",
        "Pune, Maharashtra",
        "India",
        "PIN 411001",
        "Mobile 9876543210",
    )


def test_invoice_for_cancelled_order(order_factory):
    order = Order.model_validate(
        order_factory(
            isCancelled=True,
            cancellationReason="Found a better alternative",
            cancellationDate="2026-03-02T09:30:00Z",
        )
    )

    invoice = build_invoice(order)

    assert invoice.cancellation_note == "Cancelled: Found a better alternative on 2026-03-02"


def test_missing_details_read_not_available(order_factory):
    payload = order_factory(payment_status="", product_details={"name": ""})
    del payload["userId"]
    del payload["delivery_address"]

    invoice = build_invoice(Order.model_validate(payload))

    assert invoice.customer_name == "N/A"
    assert invoice.customer_email == "N/A"
    assert invoice.product_name == "N/A"
    assert invoice.payment_status == "N/A"
    assert invoice.address_lines == ("N/A",)


def test_address_lines_skip_empty_parts():
    from storefront.modules.orders.dtos import DeliveryAddressDTO

    address = DeliveryAddressDTO(city="Pune", pincode="411001")
    assert address_lines(address) == ("Pune", "PIN 411001")


@pytest.mark.asyncio
async def test_service_invoice_by_order_number(order_service):
    await order_service.refresh()
    assert order_service.invoice("ORD-2").invoice_number == "INV-ORD-2"
