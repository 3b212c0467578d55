"""Tests for realigning counters with stored business IDs."""

from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from clinic_inventory.models.medicine import Medicine
from clinic_inventory.models.order import Order
from clinic_inventory.services.ids.counter_store import CounterStore
from clinic_inventory.services.ids.resync import resync_counters


async def _import(session_maker: async_sessionmaker[AsyncSession], *records) -> None:
    async with session_maker() as session:
        session.add_all(records)
        await session.commit()


def _order(order_number: str) -> Order:
    return Order(
        order_number=order_number,
        supplier="MediSupply Ltd",
        items=[{"name": "Gauze", "category": "Equipment", "quantity": 1}],
        created_at=datetime(2025, 1, 1, tzinfo=UTC),
    )


class TestResyncCounters:
    async def test_moves_counters_to_highest_stored_ids(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        counter_store: CounterStore,
    ):
        await _import(
            session_maker,
            Medicine(medicine_id="MED00007", medicine_name="A"),
            Medicine(medicine_id="MED00042", medicine_name="B"),
            Medicine(medicine_id="LEGACY-1", medicine_name="C"),
            _order("ORD-202501-003"),
            _order("ORD-202501-011"),
            _order("ORD-202412-005"),
            _order("MANUAL-1"),
        )

        values = await resync_counters(session_maker, counter_store)

        assert values == {"medicine": 42, "order-202412": 5, "order-202501": 11}
        assert await counter_store.increment_and_get("medicine") == 43
        assert await counter_store.increment_and_get("order-202501") == 12

    async def test_leaves_counters_that_are_ahead(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        counter_store: CounterStore,
    ):
        await _import(session_maker, Medicine(medicine_id="MED00002", medicine_name="A"))
        await counter_store.resync("medicine", 10)

        values = await resync_counters(session_maker, counter_store)

        assert values["medicine"] == 10

    async def test_empty_database(self, session_maker: async_sessionmaker[AsyncSession]):
        values = await resync_counters(session_maker)
        assert values == {"medicine": 0}
