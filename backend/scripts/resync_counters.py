#!/usr/bin/env python3
"""Resync sequence counters with the highest business IDs stored in the database.

Run this if record creation keeps failing with duplicate medicine_id or
order_number errors, typically after importing data that already carries
business IDs.

Run from the repository root with the package installed and DATABASE_URL
pointing at the database to repair:
    python backend/scripts/resync_counters.py
"""

import asyncio

import structlog

from clinic_inventory.db import async_session_maker, dispose_engine
from clinic_inventory.logging import setup_logging
from clinic_inventory.services.ids.resync import resync_counters

setup_logging()
logger = structlog.get_logger(__name__)


async def main() -> None:
    logger.info("Starting counter resync")
    try:
        values = await resync_counters(async_session_maker)
    finally:
        await dispose_engine()
    logger.info("Counter resync complete", counters=values)


if __name__ == "__main__":
    asyncio.run(main())
