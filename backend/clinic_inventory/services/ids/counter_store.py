"""Atomic named counters backing business-ID sequences."""

from collections.abc import Callable
from typing import Any

import structlog
from sqlalchemy import Table, func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel import select

from clinic_inventory.models.counter import SequenceCounter
from clinic_inventory.services.ids.exceptions import CounterUnavailableError

logger = structlog.get_logger(__name__)

# Dialects offering INSERT ... ON CONFLICT DO UPDATE ... RETURNING, with their
# two-argument "greatest" function used by resync()
_UPSERT_DIALECTS: dict[str, tuple[Callable[[Table], Any], str]] = {
    "postgresql": (pg_insert, "greatest"),
    "sqlite": (sqlite_insert, "max"),
}

_counters: Table = SequenceCounter.__table__  # type: ignore[attr-defined]


class CounterStore:
    """Persistent counters mutated only through single-statement upserts.

    Every increment runs in its own short transaction that is committed
    before the value is returned, so a drawn value stays consumed even if
    the record insert that uses it fails afterwards. Gaps in business IDs
    are expected; reuse is not possible.

    Usage:
        store = CounterStore(async_session_maker)
        seq = await store.increment_and_get("medicine")  # 1 on first use
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self.session_maker = session_maker

    async def increment_and_get(self, sequence_name: str) -> int:
        """Atomically increment `sequence_name` by one and return the new value.

        A missing counter is created as if it started at 0, in the same
        statement, so the first call returns 1.

        Raises:
            CounterUnavailableError: If the store cannot be reached or updated
        """
        _check_name(sequence_name)
        value = await self._upsert(sequence_name, initial=1, on_conflict="increment")
        logger.debug("Drew sequence value", sequence=sequence_name, value=value)
        return value

    async def resync(self, sequence_name: str, floor: int) -> int:
        """Move the counter forward to at least `floor` and return the resulting value.

        Never moves a counter backward. Used after bulk imports so the next
        draw skips past IDs that already exist.
        """
        _check_name(sequence_name)
        if floor < 0:
            raise ValueError(f"Counter floor must be non-negative, got {floor}")
        value = await self._upsert(sequence_name, initial=floor, on_conflict="greatest")
        logger.info("Resynced sequence counter", sequence=sequence_name, floor=floor, value=value)
        return value

    async def current_value(self, sequence_name: str) -> int:
        """Return the last issued value without incrementing (0 if never drawn)."""
        _check_name(sequence_name)
        try:
            async with self.session_maker() as session:
                result = await session.execute(
                    select(SequenceCounter.seq).where(SequenceCounter.name == sequence_name)
                )
                value = result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            raise CounterUnavailableError(sequence_name, str(e)) from e
        return value or 0

    async def list_counters(self) -> list[SequenceCounter]:
        """Return all counters ordered by name."""
        try:
            async with self.session_maker() as session:
                result = await session.execute(select(SequenceCounter).order_by(SequenceCounter.name))
                return list(result.scalars().all())
        except (SQLAlchemyError, OSError) as e:
            raise CounterUnavailableError("*", str(e)) from e

    async def _upsert(self, sequence_name: str, *, initial: int, on_conflict: str) -> int:
        try:
            async with self.session_maker() as session:
                dialect = session.get_bind().dialect.name
                if dialect not in _UPSERT_DIALECTS:
                    raise RuntimeError(f"Atomic counters are not supported on dialect '{dialect}'")
                insert, greatest = _UPSERT_DIALECTS[dialect]

                stmt = insert(_counters).values(name=sequence_name, seq=initial)
                if on_conflict == "increment":
                    new_seq = _counters.c.seq + 1
                else:
                    new_seq = getattr(func, greatest)(_counters.c.seq, stmt.excluded.seq)
                stmt = stmt.on_conflict_do_update(
                    index_elements=[_counters.c.name],
                    set_={"seq": new_seq},
                ).returning(_counters.c.seq)

                result = await session.execute(stmt)
                value: int = result.scalar_one()
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Sequence counter unavailable", sequence=sequence_name, error=str(e))
            raise CounterUnavailableError(sequence_name, str(e)) from e
        return value


def _check_name(sequence_name: str) -> None:
    if not sequence_name:
        raise ValueError("Sequence name must be a non-empty string")
