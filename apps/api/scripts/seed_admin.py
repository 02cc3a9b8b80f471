"""
Seed Department Admin

Creates the department admin account from the ADMIN_* settings if no admin
exists yet. The API does the same on startup; this script is for preparing
a database ahead of the first deploy.

Usage:
    cd apps/api
    python scripts/seed_admin.py
"""

import asyncio
import sys
from pathlib import Path

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infosys.core.config import settings
from infosys.core.database import create_engine_for_url, create_session_maker, init_db
from infosys.core.logging_config import setup_logging
from infosys.modules.accounts import AccountRepository
from infosys.modules.auth import ensure_admin_account


async def seed_admin() -> None:
    """Create the tables and the admin account if they don't exist."""
    setup_logging()

    engine = create_engine_for_url(settings.database_url)
    async_session = create_session_maker(engine)

    try:
        await init_db(engine)

        async with async_session() as db:
            admin = await ensure_admin_account(AccountRepository(db))

        print("Admin account ready")
        print(f"  Reg number: {admin.reg_number}")
        print(f"  Email: {admin.email}")
        print(f"  ID: {admin.id}")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed_admin())
