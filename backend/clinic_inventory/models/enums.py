"""Enum definitions for database models."""

from enum import StrEnum


class OrderStatus(StrEnum):
    """Status of a supplier order."""

    PENDING = "Pending"
    PROCESSING = "Processing"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class ItemCategory(StrEnum):
    """Inventory category an ordered item belongs to."""

    MEDICINE = "Medicine"
    CHEMICAL = "Chemical"
    EQUIPMENT = "Equipment"
