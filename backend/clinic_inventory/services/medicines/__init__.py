"""Medicine inventory services."""
