"""SQL-backed record store with typed constraint-violation errors."""

from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

import structlog
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import Table
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from clinic_inventory.services.exceptions import RecordValidationError
from clinic_inventory.services.ids.exceptions import DuplicateIdError
from clinic_inventory.services.ids.integrity import duplicate_key, violated_column

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


class SqlRecordStore(Generic[ModelT]):
    """Validates payloads against a create schema and writes them as `model` rows.

    `insert` and `update` commit on success. On failure the session is
    rolled back and the error is raised as:
    - RecordValidationError for schema violations and NOT NULL/CHECK failures
    - DuplicateIdError(field) for unique constraint violations
    """

    def __init__(self, session: AsyncSession, model: type[ModelT], schema: type[SQLModel]):
        self.session = session
        self.model = model
        self.schema = schema

    @property
    def table(self) -> Table:
        table: Table = self.model.__table__  # type: ignore[attr-defined]
        return table

    async def insert(self, payload: dict[str, Any]) -> ModelT:
        validated = self._validate(payload)
        record = self.model(**validated.model_dump())
        self.session.add(record)
        await self._commit()
        return record

    async def update(self, record: ModelT, payload: dict[str, Any], *, id_field: str) -> ModelT:
        """Apply a partial `payload` to `record`, revalidating the merged result.

        Fields missing from `payload` keep their stored values. The business
        ID in `id_field` is fixed at creation: repeating the stored value is
        accepted, any other value is rejected.
        """
        current_id = getattr(record, id_field)
        requested_id = normalize_business_id(payload, id_field).get(id_field)
        if requested_id is not None and requested_id != current_id:
            raise RecordValidationError(
                [{"field": id_field, "message": f"{id_field} cannot be changed", "kind": "immutable"}]
            )

        stored = record.model_dump(include=set(self.schema.model_fields))
        validated = self._validate({**stored, **payload, id_field: current_id})
        for field, value in validated.model_dump().items():
            if field != id_field:
                setattr(record, field, value)
        if "updated_at" in self.table.c:
            record.updated_at = datetime.now(UTC)  # type: ignore[attr-defined]

        await self._commit()
        return record

    async def delete(self, record: ModelT) -> None:
        await self.session.delete(record)
        await self.session.commit()

    def _validate(self, payload: dict[str, Any]) -> SQLModel:
        try:
            return self.schema.model_validate(payload)
        except PydanticValidationError as e:
            raise RecordValidationError(validation_details(e)) from e

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            duplicate = duplicate_key(e, self.table)
            if duplicate is not None:
                logger.info(
                    "Unique constraint violation",
                    table=self.table.name,
                    field=duplicate.field,
                    value=duplicate.value,
                )
                raise DuplicateIdError(duplicate.field, duplicate.value) from e
            column = violated_column(e)
            raise RecordValidationError(
                [{"field": column or "unknown", "message": str(e.orig), "kind": "integrity"}]
            ) from e


def validation_details(exc: PydanticValidationError) -> list[dict[str, Any]]:
    """Flatten pydantic errors into [{"field", "message", "kind"}] entries."""
    return [
        {
            "field": ".".join(str(part) for part in error["loc"]) or "__root__",
            "message": error["msg"],
            "kind": error["type"],
        }
        for error in exc.errors()
    ]


def normalize_business_id(payload: dict[str, Any], id_field: str) -> dict[str, Any]:
    """Return a copy of `payload` with a blank business ID removed and a given one trimmed."""
    normalized = dict(payload)
    value = normalized.get(id_field)
    if isinstance(value, str):
        value = value.strip()
    if value:
        normalized[id_field] = value
    else:
        normalized.pop(id_field, None)
    return normalized
