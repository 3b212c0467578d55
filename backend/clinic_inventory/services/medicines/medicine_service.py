"""Medicine inventory service."""

import re
from typing import Any

import structlog
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from clinic_inventory.models.medicine import Medicine, MedicineCreate
from clinic_inventory.services.exceptions import ValidationError
from clinic_inventory.services.ids.allocator import IdAllocator
from clinic_inventory.services.ids.sequences import MEDICINE_SEQUENCE, medicine_id_formatter
from clinic_inventory.services.medicines.exceptions import MedicineNotFound
from clinic_inventory.services.records.record_store import SqlRecordStore, normalize_business_id

logger = structlog.get_logger(__name__)

_LIKE_SPECIAL = re.compile(r"([\\%_])")


class MedicineService:
    """Service for medicine inventory operations."""

    def __init__(self, session: AsyncSession, allocator: IdAllocator):
        self.session = session
        self.allocator = allocator

    @property
    def store(self) -> SqlRecordStore[Medicine]:
        return SqlRecordStore(self.session, Medicine, MedicineCreate)

    async def create_medicine(self, payload: dict[str, Any]) -> Medicine:
        """Create a medicine, generating medicine_id ("MED00001") when not supplied."""
        medicine = await self.allocator.create_with_generated_id(
            MEDICINE_SEQUENCE,
            medicine_id_formatter(),
            normalize_business_id(payload, "medicine_id"),
            self.store.insert,
            id_field="medicine_id",
        )
        logger.info("Created medicine", id=medicine.id, medicine_id=medicine.medicine_id)
        return medicine

    async def get_medicine(self, medicine_id: str) -> Medicine:
        """Get medicine by its business ID."""
        result = await self.session.execute(select(Medicine).where(Medicine.medicine_id == medicine_id))
        medicine = result.scalars().first()
        if not medicine:
            raise MedicineNotFound()
        return medicine

    async def update_medicine(self, medicine_id: str, payload: dict[str, Any]) -> Medicine:
        """Update stock fields of a medicine. Its medicine_id never changes."""
        medicine = await self.get_medicine(medicine_id)
        medicine = await self.store.update(medicine, payload, id_field="medicine_id")
        logger.info("Updated medicine", id=medicine.id, medicine_id=medicine_id)
        return medicine

    async def delete_medicine(self, medicine_id: str) -> None:
        medicine = await self.get_medicine(medicine_id)
        logger.info("Deleting medicine", id=medicine.id, medicine_id=medicine_id)
        await self.store.delete(medicine)

    async def search_medicines(self, query: str, *, limit: int = 10) -> list[Medicine]:
        """Case-insensitive substring search on medicine_name, for autocomplete."""
        query = query.strip()
        if not query:
            raise ValidationError("Search query is required")

        escaped = _LIKE_SPECIAL.sub(r"\\\1", query)
        statement = (
            select(Medicine)
            .where(col(Medicine.medicine_name).ilike(f"%{escaped}%", escape="\\"))
            .order_by(Medicine.medicine_name)
            .limit(limit)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list_medicines(self, *, skip: int = 0, limit: int = 50) -> tuple[list[Medicine], int]:
        """List medicines ordered by business ID. Returns (medicines, total_count)."""
        statement = select(Medicine).order_by(Medicine.medicine_id).offset(skip).limit(limit)
        result = await self.session.execute(statement)
        medicines = list(result.scalars().all())

        count_result = await self.session.execute(select(func.count()).select_from(Medicine))
        total = count_result.scalar() or 0

        return medicines, total
