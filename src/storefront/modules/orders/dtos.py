"""Order DTOs.

Immutable pydantic models parsed from the order endpoints, plus the
ephemeral client-side objects of the cancellation and deletion dialogs.

Orders carry two distinct identifiers:

- ``id`` (``OrderStorageId``): the storage key (``_id``), used to key
  list rendering and to pick an order from the cached list;
- ``order_id`` (``OrderNumber``): the business-facing order number
  (``orderId``), the only key the cancel and delete endpoints accept.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, List, NewType, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from storefront.modules.orders.constants import CancellationReason, TrackingStatus

OrderStorageId = NewType("OrderStorageId", str)
OrderNumber = NewType("OrderNumber", str)


# ---------------------------------------------------------------------------
# Server-owned data
# ---------------------------------------------------------------------------


class OwnerDTO(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(default=None, alias="_id")
    name: str = ""
    email: str = ""


class DeliveryAddressDTO(BaseModel):
    model_config = ConfigDict(
        frozen=True, extra="ignore", coerce_numbers_to_str=True
    )

    address_line: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    country: Optional[str] = None
    mobile: Optional[str] = None


class ProductDetailsDTO(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    image: List[str] = Field(default_factory=list)


class Order(BaseModel):
    """Immutable cached copy of a server-owned order.

    A cancelled order always carries its cancellation reason and date,
    and stays in the collection (it remains trackable).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: OrderStorageId = Field(alias="_id")
    order_id: OrderNumber = Field(alias="orderId")
    tracking_status: TrackingStatus = TrackingStatus.PLACED
    is_cancelled: bool = Field(default=False, alias="isCancelled")
    cancellation_reason: Optional[str] = Field(default=None, alias="cancellationReason")
    cancellation_date: Optional[datetime] = Field(default=None, alias="cancellationDate")
    payment_status: str = ""
    total_amount: Decimal = Field(default=Decimal("0"), alias="totalAmt")
    product_details: ProductDetailsDTO = Field(default_factory=ProductDetailsDTO)
    delivery_address: Optional[DeliveryAddressDTO] = None
    owner: Optional[OwnerDTO] = Field(default=None, alias="userId")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @model_validator(mode="before")
    @classmethod
    def normalize_owner(cls, data: Any) -> Any:
        """Accept ``userId`` as an id, a populated user, or flat name/email keys."""
        if not isinstance(data, dict) or "owner" in data:
            return data
        ref = data.get("userId")
        owner = {"_id": ref} if isinstance(ref, str) else dict(ref or {})
        if not owner.get("name") and data.get("userName"):
            owner["name"] = data["userName"]
        if not owner.get("email") and data.get("userEmail"):
            owner["email"] = data["userEmail"]
        return {**data, "userId": owner or None}

    @model_validator(mode="after")
    def cancelled_order_is_documented(self) -> Order:
        if self.is_cancelled and (
            not self.cancellation_reason or self.cancellation_date is None
        ):
            raise ValueError(
                "A cancelled order must carry a cancellation reason and date."
            )
        return self

    @property
    def owner_name(self) -> str:
        return self.owner.name if self.owner else ""

    @property
    def owner_email(self) -> str:
        return self.owner.email if self.owner else ""


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------


class CancellationRequest(BaseModel):
    """What the cancel dialog collected.  Never persisted.

    Partially filled requests are valid objects; whether they may be
    submitted is decided by ``CancellationGuard.resolve_reason``.
    """

    model_config = ConfigDict(frozen=True)

    order_id: OrderNumber
    reason_code: Optional[CancellationReason] = None
    custom_reason_text: str = ""


class CancelOrderDTO(BaseModel):
    """Immutable outbound payload of the cancellation endpoint."""

    model_config = ConfigDict(frozen=True)

    order_id: OrderNumber
    cancellation_reason: str

    @field_validator("cancellation_reason")
    @classmethod
    def reason_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Cancellation reason must not be blank.")
        return v

    def to_payload(self) -> dict:
        return {"orderId": self.order_id, "cancellationReason": self.cancellation_reason}


# ---------------------------------------------------------------------------
# Deletion
# ---------------------------------------------------------------------------


@dataclass
class DeletionConfirmation:
    """State of one open deletion dialog.

    Gates a single delete call and is discarded when the dialog closes.
    ``typed_name`` survives one failed delete so the operator can retry;
    a second consecutive failure clears it.
    """

    order: Order
    expected_owner_name: str
    typed_name: str = ""
    last_error: Optional[str] = None
    failed_attempts: int = 0
    is_submitting: bool = False
    is_open: bool = True

    @property
    def order_id(self) -> OrderNumber:
        return self.order.order_id


# ---------------------------------------------------------------------------
# Invoice
# ---------------------------------------------------------------------------


class InvoiceDTO(BaseModel):
    """Immutable invoice view of a single order."""

    model_config = ConfigDict(frozen=True)

    invoice_number: str
    order_id: OrderNumber
    order_date: Optional[datetime]
    customer_name: str
    customer_email: str
    address_lines: Tuple[str, ...]
    product_name: str
    amount: Decimal
    payment_status: str
    cancellation_note: Optional[str] = None
