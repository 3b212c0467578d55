"""Supplier order service."""

from datetime import datetime
from typing import Any

import structlog
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from clinic_inventory.models.order import Order, OrderCreate
from clinic_inventory.services.ids.allocator import IdAllocator
from clinic_inventory.services.ids.sequences import local_year_month, order_number_formatter, order_sequence_name
from clinic_inventory.services.orders.exceptions import OrderNotFound
from clinic_inventory.services.records.record_store import SqlRecordStore, normalize_business_id

logger = structlog.get_logger(__name__)


class OrderService:
    """Service for supplier order operations.

    Order numbers restart at 001 every calendar month ("ORD-202501-001").
    Each month has its own atomic counter ("order-202501"), so concurrent
    creations within a month never compute the same number.
    """

    def __init__(self, session: AsyncSession, allocator: IdAllocator):
        self.session = session
        self.allocator = allocator

    @property
    def store(self) -> SqlRecordStore[Order]:
        return SqlRecordStore(self.session, Order, OrderCreate)

    async def create_order(self, payload: dict[str, Any], *, now: datetime | None = None) -> Order:
        """Create an order, generating order_number for the current month when not supplied."""
        year, month = local_year_month(now)
        order = await self.allocator.create_with_generated_id(
            order_sequence_name(year, month),
            order_number_formatter(year, month),
            normalize_business_id(payload, "order_number"),
            self.store.insert,
            id_field="order_number",
        )
        logger.info("Created order", id=order.id, order_number=order.order_number, supplier=order.supplier)
        return order

    async def get_order(self, order_number: str) -> Order:
        """Get order by its order number."""
        result = await self.session.execute(select(Order).where(Order.order_number == order_number))
        order = result.scalars().first()
        if not order:
            raise OrderNotFound()
        return order

    async def update_order(self, order_number: str, payload: dict[str, Any]) -> Order:
        """Update supplier, items or status of an order. Its order_number never changes."""
        order = await self.get_order(order_number)
        order = await self.store.update(order, payload, id_field="order_number")
        logger.info("Updated order", id=order.id, order_number=order_number, status=order.status)
        return order

    async def delete_order(self, order_number: str) -> None:
        order = await self.get_order(order_number)
        logger.info("Deleting order", id=order.id, order_number=order_number)
        await self.store.delete(order)

    async def list_orders(self, *, skip: int = 0, limit: int = 50) -> tuple[list[Order], int]:
        """List orders, newest first. Returns (orders, total_count)."""
        statement = (
            select(Order)
            .offset(skip)
            .limit(limit)
            .order_by(Order.created_at.desc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(statement)
        orders = list(result.scalars().all())

        count_result = await self.session.execute(select(func.count()).select_from(Order))
        total = count_result.scalar() or 0

        return orders, total
