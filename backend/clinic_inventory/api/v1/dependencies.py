"""FastAPI dependencies for service injection."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from clinic_inventory.config import settings
from clinic_inventory.db import get_session, get_session_maker
from clinic_inventory.services.ids.allocator import IdAllocator
from clinic_inventory.services.ids.counter_store import CounterStore
from clinic_inventory.services.medicines.medicine_service import MedicineService
from clinic_inventory.services.orders.order_service import OrderService


def get_counter_store(
    session_maker: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_maker)],
) -> CounterStore:
    """Get a CounterStore using its own sessions (counter commits are independent of the request)."""
    return CounterStore(session_maker)


def get_allocator(
    counter_store: Annotated[CounterStore, Depends(get_counter_store)],
) -> IdAllocator:
    """Get an IdAllocator with the configured attempt budget."""
    return IdAllocator(counter_store, max_attempts=settings.id_insert_attempts)


async def get_medicine_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    allocator: Annotated[IdAllocator, Depends(get_allocator)],
) -> MedicineService:
    """Get a MedicineService instance with the current session."""
    return MedicineService(session, allocator)


async def get_order_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    allocator: Annotated[IdAllocator, Depends(get_allocator)],
) -> OrderService:
    """Get an OrderService instance with the current session."""
    return OrderService(session, allocator)


# Type aliases for cleaner endpoint signatures
CounterStoreDep = Annotated[CounterStore, Depends(get_counter_store)]
MedicineServiceDep = Annotated[MedicineService, Depends(get_medicine_service)]
OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
