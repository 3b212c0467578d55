"""Record persistence used as the allocator's insert collaborator."""

from clinic_inventory.services.records.record_store import SqlRecordStore, normalize_business_id

__all__ = ["SqlRecordStore", "normalize_business_id"]
