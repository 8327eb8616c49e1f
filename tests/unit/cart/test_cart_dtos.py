"""Unit tests for Cart DTOs.

Covers:
- CartLine: both ``productId`` shapes, quantity >= 1, frozen immutability.
- CartSnapshot: payload parsing and line lookup.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from storefront.modules.cart.dtos import CartLine, CartSnapshot

pytestmark = pytest.mark.unit


class TestCartLineParsing:
    def test_product_id_as_plain_string(self):
        line = CartLine.model_validate({"_id": "L1", "productId": "P1", "quantity": 2})
        assert line.line_id == "L1"
        assert line.product_id == "P1"
        assert line.product is None

    def test_product_id_as_populated_product(self):
        line = CartLine.model_validate(
            {
                "_id": "L1",
                "productId": {
                    "_id": "P1",
                    "name": "Linen Shirt",
                    "price": 1200,
                    "discount": 10,
                    "stock": 4,
                },
                "quantity": 1,
                "userId": "u-1",
            }
        )
        assert line.product_id == "P1"
        assert line.product.name == "Linen Shirt"
        assert line.product.price == Decimal("1200")

    def test_populate_by_field_name(self):
        line = CartLine(line_id="L1", product_id="P1", quantity=1)
        assert line.line_id == "L1"


class TestCartLineValidation:
    def test_zero_quantity_raises(self):
        with pytest.raises(ValidationError, match="Quantity must be at least 1"):
            CartLine.model_validate({"_id": "L1", "productId": "P1", "quantity": 0})

    def test_negative_quantity_raises(self):
        with pytest.raises(ValidationError, match="Quantity must be at least 1"):
            CartLine.model_validate({"_id": "L1", "productId": "P1", "quantity": -2})

    def test_is_immutable(self):
        line = CartLine(line_id="L1", product_id="P1", quantity=1)
        with pytest.raises(ValidationError):
            line.quantity = 5


class TestCartSnapshot:
    def test_from_none_is_empty(self):
        assert CartSnapshot.from_payload(None).lines == ()

    def test_get_line(self):
        snapshot = CartSnapshot.from_payload(
            [
                {"_id": "L1", "productId": "P1", "quantity": 1},
                {"_id": "L2", "productId": "P2", "quantity": 4},
            ]
        )
        assert snapshot.get_line("L2").quantity == 4
        assert snapshot.get_line("L3") is None

    def test_snapshots_with_same_lines_are_equal(self):
        payload = [{"_id": "L1", "productId": "P1", "quantity": 1}]
        assert CartSnapshot.from_payload(payload) == CartSnapshot.from_payload(payload)
