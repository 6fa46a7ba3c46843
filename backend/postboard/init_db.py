"""
Postboard — Database Initialization Script
============================================

What:  Creates the `users` and `posts` collections in the configured database.
When:  Once, when a fresh database is provisioned (e.g. as a container init
       step). Safe to re-run: existing tables are left untouched.
Usage: DATABASE_URL=postgresql+asyncpg://... python -m postboard.init_db

The server does the same on startup while DB_AUTO_CREATE is on; deployments
that manage schema through Alembic turn that off and run `alembic upgrade head`.
"""

import asyncio
import logging
import sys
from typing import Optional

from postboard.config import Settings, settings as default_settings
from postboard.database import Database

logger = logging.getLogger("postboard.init_db")


async def init_db(settings: Optional[Settings] = None) -> None:
    database = Database(settings or default_settings)
    try:
        await database.create_all()
    finally:
        await database.dispose()


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stdout,
    )
    try:
        asyncio.run(init_db())
    except Exception as e:
        logger.error("Database initialization failed: %s", str(e))
        return 1
    logger.info("Database initialized for Postboard")
    return 0


if __name__ == "__main__":
    sys.exit(main())
