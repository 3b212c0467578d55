"""API schemas for medicine, order and sequence endpoints."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, field_serializer

from clinic_inventory.models.counter import SequenceCounter
from clinic_inventory.models.enums import ItemCategory, OrderStatus
from clinic_inventory.models.medicine import Medicine
from clinic_inventory.models.order import Order
from clinic_inventory.utils.datetime_utils import to_api_timezone


def _serialize_datetime(dt: datetime) -> str:
    localized_dt = to_api_timezone(dt)
    assert localized_dt is not None
    return localized_dt.isoformat()


# =============================================================================
# Medicines
# =============================================================================


class MedicineResponse(BaseModel):
    """Medicine response schema."""

    id: str
    medicine_id: str
    medicine_name: str
    generic_name: str | None
    strength: str | None
    unit: str | None
    dosage_form: str | None
    batch_number: str | None
    quantity: int
    reorder_level: int
    manufacture_date: date | None
    expiry_date: date | None
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, dt: datetime) -> str:
        """Serialize datetime to API timezone."""
        return _serialize_datetime(dt)

    @classmethod
    def from_model(cls, medicine: Medicine) -> "MedicineResponse":
        """Create response from Medicine model."""
        return cls.model_validate(medicine, from_attributes=True)


class MedicineListResponse(BaseModel):
    """Paginated list of medicines."""

    medicines: list[MedicineResponse]
    total: int


# =============================================================================
# Orders
# =============================================================================


class OrderItemResponse(BaseModel):
    """Order line item."""

    name: str
    category: ItemCategory
    quantity: int


class OrderResponse(BaseModel):
    """Order response schema."""

    id: str
    order_number: str
    supplier: str
    supplier_email: str | None
    items: list[OrderItemResponse]
    status: OrderStatus
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, dt: datetime) -> str:
        """Serialize datetime to API timezone."""
        return _serialize_datetime(dt)

    @classmethod
    def from_model(cls, order: Order) -> "OrderResponse":
        """Create response from Order model."""
        items: list[dict[str, Any]] = order.items or []
        return cls(
            id=order.id,
            order_number=order.order_number,
            supplier=order.supplier,
            supplier_email=order.supplier_email,
            items=[OrderItemResponse.model_validate(item) for item in items],
            status=order.status,
            created_at=order.created_at,
        )


class OrderListResponse(BaseModel):
    """Paginated list of orders."""

    orders: list[OrderResponse]
    total: int


# =============================================================================
# Sequences
# =============================================================================


class SequenceResponse(BaseModel):
    """Current value of a named sequence counter."""

    name: str
    seq: int

    @classmethod
    def from_model(cls, counter: SequenceCounter) -> "SequenceResponse":
        """Create response from SequenceCounter model."""
        return cls(name=counter.name, seq=counter.seq)


# =============================================================================
# Common
# =============================================================================


class StatusResponse(BaseModel):
    """Generic status response."""

    status: str
    message: str | None = None
