"""Database models."""

from sqlmodel import SQLModel

from clinic_inventory.models.counter import SequenceCounter
from clinic_inventory.models.enums import ItemCategory, OrderStatus
from clinic_inventory.models.medicine import Medicine, MedicineCreate
from clinic_inventory.models.order import Order, OrderCreate, OrderItem

__all__ = [
    "SQLModel",
    "SequenceCounter",
    "Medicine",
    "MedicineCreate",
    "Order",
    "OrderCreate",
    "OrderItem",
    "OrderStatus",
    "ItemCategory",
]
