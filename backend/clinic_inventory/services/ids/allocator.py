"""Record creation with generated business IDs and retry on ID collision."""

from collections.abc import Awaitable, Callable
from functools import partial
from typing import Any, TypeVar

import structlog
from tenacity import AsyncRetrying, RetryCallState, RetryError, retry_if_exception, stop_after_attempt

from clinic_inventory.services.ids.counter_store import CounterStore
from clinic_inventory.services.ids.exceptions import DuplicateIdError, RetryExhaustedError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

IdFormatter = Callable[[int], str]
InsertFn = Callable[[dict[str, Any]], Awaitable[T]]


def _is_id_collision(id_field: str, exc: BaseException) -> bool:
    """Only a duplicate on the business-ID field itself is worth a fresh draw."""
    return isinstance(exc, DuplicateIdError) and exc.field == id_field


class IdAllocator:
    """Creates records whose business ID is drawn from a CounterStore sequence.

    Each attempt draws a fresh counter value, formats it and calls
    `insert_fn` with the payload's `id_field` set. A DuplicateIdError on
    `id_field` triggers another attempt (one retry with the default of two
    attempts); every other error propagates unchanged after the first
    failure. Drawn values are never returned to the counter.

    Usage:
        allocator = IdAllocator(CounterStore(async_session_maker))
        medicine = await allocator.create_with_generated_id(
            "medicine",
            partial(format_padded_id, "MED", width=5),
            payload,
            record_store.insert,
            id_field="medicine_id",
        )
    """

    def __init__(self, counter_store: CounterStore, *, max_attempts: int = 2):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.counter_store = counter_store
        self.max_attempts = max_attempts

    async def create_with_generated_id(
        self,
        sequence_name: str,
        formatter: IdFormatter,
        payload: dict[str, Any],
        insert_fn: InsertFn[T],
        *,
        id_field: str,
    ) -> T:
        """Insert `payload`, generating `id_field` from `sequence_name` when it is not supplied.

        Returns:
            Whatever `insert_fn` returns for the successful attempt

        Raises:
            CounterUnavailableError: Counter store unreachable (never retried here)
            DuplicateIdError: Conflict on a field other than `id_field`, or on a caller-supplied ID
            RecordValidationError: Payload rejected by the record store
            RetryExhaustedError: Every attempt collided on `id_field`
        """
        if payload.get(id_field):
            # Caller-supplied ID is used verbatim: no counter draw, single attempt
            logger.debug("Using caller-supplied business ID", field=id_field, value=payload[id_field])
            return await insert_fn(payload)

        attempted_ids: list[str] = []
        retrying = AsyncRetrying(
            retry=retry_if_exception(partial(_is_id_collision, id_field)),
            stop=stop_after_attempt(self.max_attempts),
            before_sleep=partial(self._log_collision, sequence_name, id_field, attempted_ids),
            reraise=False,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    seq = await self.counter_store.increment_and_get(sequence_name)
                    business_id = formatter(seq)
                    attempted_ids.append(business_id)
                    record = await insert_fn({**payload, id_field: business_id})
        except RetryError as e:
            logger.error(
                "Business ID allocation exhausted",
                sequence=sequence_name,
                field=id_field,
                attempted_ids=attempted_ids,
            )
            raise RetryExhaustedError(
                sequence_name,
                id_field,
                attempts=len(attempted_ids),
                last_value=attempted_ids[-1] if attempted_ids else None,
            ) from e.last_attempt.exception()

        logger.debug(
            "Allocated business ID",
            sequence=sequence_name,
            field=id_field,
            value=attempted_ids[-1],
            attempts=len(attempted_ids),
        )
        return record

    @staticmethod
    def _log_collision(
        sequence_name: str,
        id_field: str,
        attempted_ids: list[str],
        retry_state: RetryCallState,
    ) -> None:
        logger.warning(
            "Generated business ID already exists, drawing a new one",
            sequence=sequence_name,
            field=id_field,
            value=attempted_ids[-1] if attempted_ids else None,
            attempt=retry_state.attempt_number,
        )
