"""Supplier order services."""
