"""Supplier order models."""

from datetime import UTC, datetime
from typing import Any

from pydantic import field_validator
from sqlalchemy import JSON, Column, DateTime, Enum
from sqlmodel import Field, SQLModel

from clinic_inventory.models.enums import ItemCategory, OrderStatus
from clinic_inventory.models.types import ULIDType, new_ulid


def _utc_now() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


class OrderItem(SQLModel):
    """Single line of a supplier order, stored inside the order's JSON items column."""

    name: str = Field(min_length=1, max_length=200)
    category: ItemCategory = ItemCategory.MEDICINE
    quantity: int = Field(default=1, ge=1)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value


class OrderCreate(SQLModel):
    """Payload for creating an order. order_number is generated when omitted."""

    order_number: str | None = Field(default=None, max_length=32)
    supplier: str = Field(min_length=1, max_length=200)
    supplier_email: str | None = Field(default=None, max_length=254)
    items: list[OrderItem] = Field(min_length=1)
    status: OrderStatus = OrderStatus.PENDING

    @field_validator("order_number", "supplier", "supplier_email", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("order_number", "supplier_email", mode="after")
    @classmethod
    def _empty_to_none(cls, value: str | None) -> str | None:
        return value or None


class Order(SQLModel, table=True):
    """Supplier order for medicines, chemicals or equipment."""

    __tablename__ = "orders"

    # ULID stored as UUID
    id: str = Field(
        default_factory=new_ulid,
        max_length=26,
        sa_column=Column(ULIDType, primary_key=True),
    )

    # Business ID: "ORD-202501-003"
    order_number: str = Field(unique=True, index=True, max_length=32)

    supplier: str = Field(max_length=200)
    supplier_email: str | None = Field(default=None, max_length=254)
    items: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    status: OrderStatus = Field(
        default=OrderStatus.PENDING,
        sa_column=Column(
            Enum(OrderStatus, values_callable=lambda e: [x.value for x in e], name="orderstatus"),
            nullable=False,
        ),
    )
    created_at: datetime = Field(default_factory=_utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))
    updated_at: datetime = Field(default_factory=_utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))
