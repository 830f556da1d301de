"""Create all tables (development and tests; production uses migrations)."""
from __future__ import annotations

import argparse
import asyncio
import logging

from clarity_service.infrastructure.db import models  # noqa: F401
from clarity_service.infrastructure.db.base import Base
from clarity_service.infrastructure.db.session import engine

logger = logging.getLogger(__name__)

async def init_db(drop: bool = False) -> None:
    async with engine.begin() as conn:
        if drop:
            await conn.run_sync(Base.metadata.drop_all)
            logger.info("Dropped all tables")
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    logger.info("Created %d tables", len(Base.metadata.tables))

def main() -> None:

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--drop", action="store_true", help="drop existing tables first")
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    asyncio.run(init_db(drop=args.drop))

if __name__ == "__main__":
    main()
