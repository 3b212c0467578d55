"""Tests for the SQL record store."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_inventory.models.medicine import Medicine, MedicineCreate
from clinic_inventory.services.exceptions import RecordValidationError
from clinic_inventory.services.ids.exceptions import DuplicateIdError
from clinic_inventory.services.records.record_store import SqlRecordStore, normalize_business_id


@pytest.fixture
def store(session: AsyncSession) -> SqlRecordStore[Medicine]:
    return SqlRecordStore(session, Medicine, MedicineCreate)


class TestInsert:
    async def test_inserts_validated_record(self, store: SqlRecordStore[Medicine]):
        medicine = await store.insert(
            {"medicine_id": "MED00001", "medicine_name": "  Amoxicillin ", "quantity": "12", "batch_number": ""}
        )

        assert medicine.id
        assert medicine.medicine_name == "Amoxicillin"
        assert medicine.quantity == 12
        assert medicine.batch_number is None

    async def test_duplicate_business_id(self, store: SqlRecordStore[Medicine]):
        await store.insert({"medicine_id": "MED00001", "medicine_name": "Amoxicillin"})

        with pytest.raises(DuplicateIdError) as exc_info:
            await store.insert({"medicine_id": "MED00001", "medicine_name": "Ibuprofen"})

        assert exc_info.value.field == "medicine_id"

    async def test_duplicate_other_unique_field(self, store: SqlRecordStore[Medicine]):
        await store.insert({"medicine_id": "MED00001", "medicine_name": "Amoxicillin", "batch_number": "B-1"})

        with pytest.raises(DuplicateIdError) as exc_info:
            await store.insert({"medicine_id": "MED00002", "medicine_name": "Ibuprofen", "batch_number": "B-1"})

        assert exc_info.value.field == "batch_number"

    async def test_session_usable_after_duplicate(self, store: SqlRecordStore[Medicine]):
        await store.insert({"medicine_id": "MED00001", "medicine_name": "Amoxicillin"})
        with pytest.raises(DuplicateIdError):
            await store.insert({"medicine_id": "MED00001", "medicine_name": "Ibuprofen"})

        medicine = await store.insert({"medicine_id": "MED00002", "medicine_name": "Ibuprofen"})

        assert medicine.medicine_id == "MED00002"

    async def test_schema_violation_details(self, store: SqlRecordStore[Medicine]):
        with pytest.raises(RecordValidationError) as exc_info:
            await store.insert({"medicine_id": "MED00001", "medicine_name": "", "quantity": -3})

        fields = {detail["field"] for detail in exc_info.value.details}
        assert fields == {"medicine_name", "quantity"}
        assert all({"field", "message", "kind"} <= detail.keys() for detail in exc_info.value.details)

    async def test_missing_business_id_is_a_validation_error(self, store: SqlRecordStore[Medicine]):
        with pytest.raises(RecordValidationError) as exc_info:
            await store.insert({"medicine_name": "Amoxicillin"})

        assert exc_info.value.details[0]["field"] == "medicine_id"


class TestNormalizeBusinessId:
    def test_strips_value(self):
        assert normalize_business_id({"medicine_id": " MED1 "}, "medicine_id") == {"medicine_id": "MED1"}

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_blank_is_removed(self, value):
        assert normalize_business_id({"medicine_id": value, "x": 1}, "medicine_id") == {"x": 1}

    def test_does_not_mutate_input(self):
        payload = {"medicine_id": ""}
        normalize_business_id(payload, "medicine_id")
        assert payload == {"medicine_id": ""}


class TestUpdate:
    async def test_partial_payload_keeps_other_fields(self, store: SqlRecordStore[Medicine]):
        medicine = await store.insert(
            {"medicine_id": "MED00001", "medicine_name": "Amoxicillin", "strength": "250mg", "quantity": 5}
        )
        created_updated_at = medicine.updated_at

        updated = await store.update(medicine, {"quantity": "40"}, id_field="medicine_id")

        assert updated.quantity == 40
        assert updated.strength == "250mg"
        assert updated.medicine_name == "Amoxicillin"
        assert updated.updated_at >= created_updated_at

    async def test_applies_create_time_cleanup(self, store: SqlRecordStore[Medicine]):
        medicine = await store.insert(
            {"medicine_id": "MED00001", "medicine_name": "Amoxicillin", "reorder_level": 10, "expiry_date": "2026-01-01"}
        )

        updated = await store.update(
            medicine,
            {"medicine_name": "  Amoxil ", "reorder_level": "", "expiry_date": ""},
            id_field="medicine_id",
        )

        assert updated.medicine_name == "Amoxil"
        assert updated.reorder_level == 0
        assert updated.expiry_date is None

    async def test_same_business_id_is_accepted(self, store: SqlRecordStore[Medicine]):
        medicine = await store.insert({"medicine_id": "MED00001", "medicine_name": "Amoxicillin"})

        updated = await store.update(medicine, {"medicine_id": " MED00001 ", "quantity": 3}, id_field="medicine_id")

        assert updated.medicine_id == "MED00001"
        assert updated.quantity == 3

    async def test_changed_business_id_is_rejected(self, store: SqlRecordStore[Medicine]):
        medicine = await store.insert({"medicine_id": "MED00001", "medicine_name": "Amoxicillin"})

        with pytest.raises(RecordValidationError) as exc_info:
            await store.update(medicine, {"medicine_id": "MED00999", "quantity": 3}, id_field="medicine_id")

        assert exc_info.value.details == [
            {"field": "medicine_id", "message": "medicine_id cannot be changed", "kind": "immutable"}
        ]
        assert medicine.medicine_id == "MED00001"
        assert medicine.quantity == 0

    async def test_invalid_value_leaves_record_untouched(self, store: SqlRecordStore[Medicine]):
        medicine = await store.insert({"medicine_id": "MED00001", "medicine_name": "Amoxicillin", "quantity": 5})

        with pytest.raises(RecordValidationError) as exc_info:
            await store.update(medicine, {"quantity": -1}, id_field="medicine_id")

        assert exc_info.value.details[0]["field"] == "quantity"
        assert medicine.quantity == 5

    async def test_duplicate_unique_field(self, store: SqlRecordStore[Medicine]):
        await store.insert({"medicine_id": "MED00001", "medicine_name": "Amoxicillin", "batch_number": "B-1"})
        other = await store.insert({"medicine_id": "MED00002", "medicine_name": "Ibuprofen", "batch_number": "B-2"})

        with pytest.raises(DuplicateIdError) as exc_info:
            await store.update(other, {"batch_number": "B-1"}, id_field="medicine_id")

        assert exc_info.value.field == "batch_number"


class TestDelete:
    async def test_removes_row(self, store: SqlRecordStore[Medicine], session: AsyncSession):
        medicine = await store.insert({"medicine_id": "MED00001", "medicine_name": "Amoxicillin"})

        await store.delete(medicine)

        assert await session.get(Medicine, medicine.id) is None
