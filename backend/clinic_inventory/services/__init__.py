"""Services module.

This module provides the service layer architecture:
- exceptions: Base service exceptions
- ids: Business-ID formatting, atomic counters and collision-retry allocation
- records: SQL record store used as the allocator's insert collaborator
- medicines: Medicine inventory service
- orders: Supplier order service
"""
