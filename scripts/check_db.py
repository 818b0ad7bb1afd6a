"""Check that the configured media database is reachable.

Usage: python scripts/check_db.py
"""

import asyncio
import logging
import os
import sys

# Add parent directory to path so the project modules import when run directly
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import ConfigError, load_settings
from database import Database
from errors import generate_error_message

logger = logging.getLogger("check_db")


async def check(database: Database) -> bool:
    try:
        return await database.ping()
    except Exception as e:
        logger.error("Connection failed: %s", generate_error_message(e))
        return False
    finally:
        await database.disconnect()


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        settings = load_settings()
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        return 1

    ok = asyncio.run(check(Database(settings.database.url)))
    if ok:
        logger.info("Connection successful")
        return 0
    return 1


if __name__ == "__main__":
    sys.exit(main())
