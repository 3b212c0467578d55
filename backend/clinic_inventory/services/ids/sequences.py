"""Named sequences and their business-ID formats."""

from datetime import UTC, datetime
from functools import partial
from zoneinfo import ZoneInfo

from clinic_inventory.config import settings
from clinic_inventory.services.ids.formatter import format_dated_id, format_padded_id

MEDICINE_SEQUENCE = "medicine"
ORDER_SEQUENCE_PREFIX = "order-"


def order_sequence_name(year: int, month: int) -> str:
    """Counter name for one calendar month of order numbers, e.g. "order-202501"."""
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    return f"{ORDER_SEQUENCE_PREFIX}{year:04d}{month:02d}"


def medicine_id_formatter() -> partial[str]:
    """Formatter producing "MED00001"-style medicine IDs."""
    return partial(format_padded_id, settings.medicine_id_prefix, width=settings.medicine_id_width)


def order_number_formatter(year: int, month: int) -> partial[str]:
    """Formatter producing "ORD-202501-001"-style order numbers for one month."""
    return partial(format_dated_id, settings.order_number_prefix, year, month, width=settings.order_number_width)


def local_year_month(now: datetime | None = None) -> tuple[int, int]:
    """Calendar (year, month) of `now` in the configured timezone."""
    if now is None:
        now = datetime.now(UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    local = now.astimezone(ZoneInfo(settings.timezone))
    return local.year, local.month
