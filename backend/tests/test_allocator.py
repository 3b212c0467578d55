"""Tests for record creation with generated business IDs."""

from functools import partial
from typing import Any

import pytest

from clinic_inventory.services.exceptions import RecordValidationError
from clinic_inventory.services.ids.allocator import IdAllocator
from clinic_inventory.services.ids.counter_store import CounterStore
from clinic_inventory.services.ids.exceptions import (
    CounterUnavailableError,
    DuplicateIdError,
    RetryExhaustedError,
)
from clinic_inventory.services.ids.formatter import format_padded_id

MED_FORMAT = partial(format_padded_id, "MED", width=5)


class RecordingInsert:
    """Insert function that raises the queued failures first, then echoes the payload."""

    def __init__(self, *failures: BaseException, always: BaseException | None = None):
        self.failures = list(failures)
        self.always = always
        self.calls: list[dict[str, Any]] = []

    async def __call__(self, payload: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(dict(payload))
        if self.always is not None:
            raise self.always
        if self.failures:
            raise self.failures.pop(0)
        return payload


async def _create(allocator: IdAllocator, insert: RecordingInsert, payload: dict[str, Any] | None = None):
    return await allocator.create_with_generated_id(
        "medicine",
        MED_FORMAT,
        payload if payload is not None else {"medicine_name": "Paracetamol"},
        insert,
        id_field="medicine_id",
    )


class TestHappyPath:
    async def test_one_draw_one_insert(self, allocator: IdAllocator, counter_store: CounterStore):
        insert = RecordingInsert()

        record = await _create(allocator, insert)

        assert record["medicine_id"] == "MED00001"
        assert record["medicine_name"] == "Paracetamol"
        assert len(insert.calls) == 1
        assert await counter_store.current_value("medicine") == 1

    async def test_does_not_mutate_caller_payload(self, allocator: IdAllocator):
        payload = {"medicine_name": "Ibuprofen"}
        await _create(allocator, RecordingInsert(), payload)
        assert "medicine_id" not in payload


class TestRetryOnIdCollision:
    async def test_retries_once_with_fresh_value(self, allocator: IdAllocator, counter_store: CounterStore):
        insert = RecordingInsert(DuplicateIdError("medicine_id", "MED00001"))

        record = await _create(allocator, insert)

        assert [call["medicine_id"] for call in insert.calls] == ["MED00001", "MED00002"]
        assert record["medicine_id"] == "MED00002"
        assert await counter_store.current_value("medicine") == 2

    async def test_other_unique_field_is_not_retried(self, allocator: IdAllocator, counter_store: CounterStore):
        insert = RecordingInsert(DuplicateIdError("batch_number", "B-1"))

        with pytest.raises(DuplicateIdError) as exc_info:
            await _create(allocator, insert)

        assert exc_info.value.field == "batch_number"
        assert len(insert.calls) == 1
        assert await counter_store.current_value("medicine") == 1

    async def test_exhaustion_after_two_attempts(self, allocator: IdAllocator, counter_store: CounterStore):
        insert = RecordingInsert(always=DuplicateIdError("medicine_id"))

        with pytest.raises(RetryExhaustedError) as exc_info:
            await _create(allocator, insert)

        assert len(insert.calls) == 2
        assert exc_info.value.attempts == 2
        assert exc_info.value.field == "medicine_id"
        assert exc_info.value.last_value == "MED00002"
        assert isinstance(exc_info.value.__cause__, DuplicateIdError)
        assert await counter_store.current_value("medicine") == 2

    async def test_consumed_values_are_not_reused(self, allocator: IdAllocator, counter_store: CounterStore):
        with pytest.raises(RetryExhaustedError):
            await _create(allocator, RecordingInsert(always=DuplicateIdError("medicine_id")))

        record = await _create(allocator, RecordingInsert())

        assert record["medicine_id"] == "MED00003"

    async def test_attempt_budget_is_configurable(self, counter_store: CounterStore):
        allocator = IdAllocator(counter_store, max_attempts=3)
        insert = RecordingInsert(always=DuplicateIdError("medicine_id"))

        with pytest.raises(RetryExhaustedError):
            await _create(allocator, insert)

        assert len(insert.calls) == 3

    def test_rejects_zero_attempts(self, counter_store: CounterStore):
        with pytest.raises(ValueError):
            IdAllocator(counter_store, max_attempts=0)


class TestOtherFailures:
    async def test_validation_error_is_not_retried(self, allocator: IdAllocator, counter_store: CounterStore):
        error = RecordValidationError([{"field": "quantity", "message": "negative", "kind": "greater_than_equal"}])
        insert = RecordingInsert(error)

        with pytest.raises(RecordValidationError) as exc_info:
            await _create(allocator, insert)

        assert exc_info.value.details[0]["field"] == "quantity"
        assert len(insert.calls) == 1

    async def test_unexpected_error_propagates(self, allocator: IdAllocator):
        insert = RecordingInsert(RuntimeError("boom"))

        with pytest.raises(RuntimeError, match="boom"):
            await _create(allocator, insert)

        assert len(insert.calls) == 1

    async def test_counter_unavailable_skips_insert(self, unreachable_store: CounterStore):
        allocator = IdAllocator(unreachable_store)
        insert = RecordingInsert()

        with pytest.raises(CounterUnavailableError):
            await _create(allocator, insert)

        assert insert.calls == []


class TestExplicitId:
    async def test_supplied_id_bypasses_counter(self, allocator: IdAllocator, counter_store: CounterStore):
        insert = RecordingInsert()

        record = await _create(allocator, insert, {"medicine_id": "LEGACY-7", "medicine_name": "Aspirin"})

        assert record["medicine_id"] == "LEGACY-7"
        assert len(insert.calls) == 1
        assert await counter_store.current_value("medicine") == 0

    async def test_duplicate_supplied_id_is_not_retried(self, allocator: IdAllocator, counter_store: CounterStore):
        insert = RecordingInsert(DuplicateIdError("medicine_id", "MED00001"))

        with pytest.raises(DuplicateIdError):
            await _create(allocator, insert, {"medicine_id": "MED00001", "medicine_name": "Aspirin"})

        assert len(insert.calls) == 1
        assert await counter_store.current_value("medicine") == 0
