"""Utility functions and helpers."""

from clinic_inventory.utils.datetime_utils import to_api_timezone

__all__ = [
    "to_api_timezone",
]
