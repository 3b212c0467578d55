"""Business-ID allocation.

- formatter: pure functions rendering sequence values as business IDs
- counter_store: atomic, persistent named counters
- allocator: record creation with one retry on business-ID collision
- integrity: IntegrityError inspection (which field collided)
- sequences: the application's named sequences and their formats
"""

from clinic_inventory.services.ids.allocator import IdAllocator
from clinic_inventory.services.ids.counter_store import CounterStore
from clinic_inventory.services.ids.exceptions import (
    CounterUnavailableError,
    DuplicateIdError,
    IdAllocationError,
    RetryExhaustedError,
)
from clinic_inventory.services.ids.formatter import format_dated_id, format_padded_id, parse_sequence_number

__all__ = [
    "IdAllocator",
    "CounterStore",
    "CounterUnavailableError",
    "DuplicateIdError",
    "IdAllocationError",
    "RetryExhaustedError",
    "format_dated_id",
    "format_padded_id",
    "parse_sequence_number",
]
