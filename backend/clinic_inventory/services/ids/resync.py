"""Realign sequence counters with the business IDs already stored.

After a bulk import (or a restore of older data) a counter can lag behind
the highest stored ID, and every generated ID would collide until the
counter catches up. Resyncing moves each counter forward to the highest
number in use; counters that are already ahead are left alone.
"""

import re
from collections import defaultdict

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel import select

from clinic_inventory.config import settings
from clinic_inventory.models.medicine import Medicine
from clinic_inventory.models.order import Order
from clinic_inventory.services.ids.counter_store import CounterStore
from clinic_inventory.services.ids.formatter import parse_sequence_number
from clinic_inventory.services.ids.sequences import MEDICINE_SEQUENCE, order_sequence_name

logger = structlog.get_logger(__name__)


async def highest_medicine_number(session: AsyncSession) -> int:
    """Highest numeric suffix among stored medicine IDs (0 if none match the format)."""
    prefix = settings.medicine_id_prefix
    result = await session.execute(select(Medicine.medicine_id).where(Medicine.medicine_id.startswith(prefix)))  # type: ignore[attr-defined]
    highest = 0
    for medicine_id in result.scalars():
        number = parse_sequence_number(prefix, medicine_id)
        if number is None:
            logger.warning("Medicine ID doesn't match expected format", medicine_id=medicine_id)
            continue
        highest = max(highest, number)
    return highest


async def highest_order_numbers(session: AsyncSession) -> dict[str, int]:
    """Highest order sequence number per monthly counter name."""
    pattern = re.compile(rf"^{re.escape(settings.order_number_prefix)}-(\d{{4}})(\d{{2}})-(\d+)$")
    result = await session.execute(select(Order.order_number))
    highest: dict[str, int] = defaultdict(int)
    for order_number in result.scalars():
        match = pattern.match(order_number)
        if match is None:
            logger.warning("Order number doesn't match expected format", order_number=order_number)
            continue
        year, month, number = (int(group) for group in match.groups())
        if not 1 <= month <= 12:
            logger.warning("Order number has an invalid month", order_number=order_number)
            continue
        name = order_sequence_name(year, month)
        highest[name] = max(highest[name], number)
    return dict(highest)


async def resync_counters(
    session_maker: async_sessionmaker[AsyncSession],
    counter_store: CounterStore | None = None,
) -> dict[str, int]:
    """Move every known counter forward to the highest stored number.

    Returns:
        Mapping of sequence name to its value after the resync
    """
    counter_store = counter_store or CounterStore(session_maker)

    async with session_maker() as session:
        floors = {MEDICINE_SEQUENCE: await highest_medicine_number(session)}
        floors.update(await highest_order_numbers(session))

    values: dict[str, int] = {}
    for name, floor in sorted(floors.items()):
        before = await counter_store.current_value(name)
        values[name] = await counter_store.resync(name, floor)
        if values[name] != before:
            logger.info("Counter moved forward", sequence=name, before=before, after=values[name])
        else:
            logger.info("Counter already ahead of stored IDs", sequence=name, value=before, highest=floor)
    return values
