#!/usr/bin/env python3
"""
Set a feature setting in the settings table.

Usage:
    python scripts/set_setting.py checkin_enabled false
    python scripts/set_setting.py checkin_reward 15

Database connection is read from the same POSTGRES_* environment
variables as the API.
"""

import asyncio
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from src.core.result import Failure
from src.infra.database import get_database_manager
from src.infra.repository.settings_repository import SettingsRepository


async def set_setting(key: str, value: str) -> int:
    """Write one setting and report the outcome."""
    db_manager = get_database_manager()
    await db_manager.connect()

    try:
        async with db_manager.get_session_factory()() as session:
            result = await SettingsRepository(session).set_setting(key, value)
    finally:
        await db_manager.close()

    if isinstance(result, Failure):
        print(f"ERROR: could not set {key}: {result.message}")
        return 1

    print(f"{key} = {value}")
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(2)
    sys.exit(asyncio.run(set_setting(sys.argv[1], sys.argv[2])))
