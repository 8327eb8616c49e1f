"""Cart DTOs.

Immutable pydantic models parsed from the cart endpoint.  The server
sends ``productId`` either as a bare id or as the populated product
document; both shapes produce the same ``CartLine``.

- ``ProductDTO``: the populated product, when present.
- ``CartLine``: one line of the cart (quantity is always >= 1).
- ``CartSnapshot``: the whole cart, replaced wholesale on every refresh.
- ``CartMembership``: answer of the membership index for one product.
- ``CartSummary``: totals shown next to the cart.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from storefront.modules.cart.constants import MIN_LINE_QUANTITY


class ProductDTO(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    name: str = ""
    price: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")
    stock: Optional[int] = None
    image: List[str] = Field(default_factory=list)


class CartLine(BaseModel):
    """Immutable cached copy of a server-owned cart line."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    line_id: str = Field(alias="_id")
    product_id: str = Field(alias="productId")
    quantity: int
    product: Optional[ProductDTO] = None

    @model_validator(mode="before")
    @classmethod
    def unpack_populated_product(cls, data: Any) -> Any:
        if isinstance(data, dict):
            ref = data.get("productId")
            if isinstance(ref, dict):
                data = {**data, "productId": ref.get("_id"), "product": ref}
        return data

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < MIN_LINE_QUANTITY:
            raise ValueError("Quantity must be at least 1.")
        return v


class CartSnapshot(BaseModel):
    """The cart as last returned by the server."""

    model_config = ConfigDict(frozen=True)

    lines: Tuple[CartLine, ...] = ()

    @classmethod
    def from_payload(cls, data: Any) -> CartSnapshot:
        """Build a snapshot from the ``data`` field of the cart envelope."""
        return cls(lines=tuple(data or ()))

    def get_line(self, line_id: str) -> Optional[CartLine]:
        for line in self.lines:
            if line.line_id == line_id:
                return line
        return None


class CartMembership(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_present: bool
    line: Optional[CartLine] = None

    @property
    def quantity(self) -> int:
        return self.line.quantity if self.line else 0


class CartSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_quantity: int = 0
    total_price: Decimal = Decimal("0")
    total_discounted_price: Decimal = Decimal("0")

    @property
    def savings(self) -> Decimal:
        return self.total_price - self.total_discounted_price
