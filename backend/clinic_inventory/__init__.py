"""Clinic inventory backend: medicines, supplier orders and business-ID allocation."""
