"""Medicine inventory models."""

from datetime import UTC, date, datetime
from typing import Any

from pydantic import field_validator
from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel

from clinic_inventory.models.types import ULIDType, new_ulid

_TRIMMED_FIELDS = ("medicine_name", "generic_name", "strength", "unit", "batch_number", "dosage_form")
_OPTIONAL_TEXT_FIELDS = ("generic_name", "strength", "unit", "batch_number", "dosage_form")


def _utc_now() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


class MedicineBase(SQLModel):
    """Fields shared by the medicine table and its create schema."""

    medicine_name: str = Field(min_length=1, max_length=200)
    generic_name: str | None = Field(default=None, max_length=200)
    strength: str | None = Field(default=None, max_length=50)
    unit: str | None = Field(default=None, max_length=50)
    dosage_form: str | None = Field(default=None, max_length=50)
    batch_number: str | None = Field(default=None, unique=True, index=True, max_length=64)
    quantity: int = Field(default=0, ge=0)
    reorder_level: int = Field(default=0, ge=0)
    manufacture_date: date | None = None
    expiry_date: date | None = None

    @field_validator(*_TRIMMED_FIELDS, mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator(*_OPTIONAL_TEXT_FIELDS, mode="after")
    @classmethod
    def _empty_to_none(cls, value: str | None) -> str | None:
        # Blank optional values are stored as NULL so they never collide on unique columns
        return value or None

    @field_validator("manufacture_date", "expiry_date", mode="before")
    @classmethod
    def _blank_date(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @field_validator("reorder_level", mode="before")
    @classmethod
    def _blank_reorder_level(cls, value: Any) -> Any:
        if value is None or value == "":
            return 0
        return value


class MedicineCreate(MedicineBase):
    """Payload for creating a medicine. medicine_id is generated when omitted."""

    medicine_id: str | None = Field(default=None, max_length=32)

    @field_validator("medicine_id", mode="before")
    @classmethod
    def _strip_medicine_id(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip() or None
        return value


class Medicine(MedicineBase, table=True):
    """Medicine stock record."""

    __tablename__ = "medicines"

    # ULID stored as UUID
    id: str = Field(
        default_factory=new_ulid,
        max_length=26,
        sa_column=Column(ULIDType, primary_key=True),
    )

    # Business ID: "MED00001"
    medicine_id: str = Field(unique=True, index=True, max_length=32)

    created_at: datetime = Field(default_factory=_utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))
    updated_at: datetime = Field(default_factory=_utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))
