#!/usr/bin/env python3
"""Create the Notely tables (tenants, users, notes) if they do not exist.

Usage:
    python scripts/setup_db.py
    python scripts/setup_db.py --database-url postgresql+asyncpg://u:p@host/db
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

# Ensure project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from notely.core.logging import get_logger, setup_logging
from notely.store.schema import close_engine, get_engine, init_schema, metadata

log = get_logger(__name__)


async def main(database_url: str | None) -> None:
    setup_logging(json_output=False)
    if database_url:
        await get_engine(database_url)

    try:
        await init_schema()
        log.info("tables_ready", tables=sorted(metadata.tables))
    except Exception as exc:
        log.error("schema_initialization_failed", error=str(exc))
        raise
    finally:
        await close_engine()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Initialize the Notely schema")
    parser.add_argument("--database-url", default=None, help="Overrides DATABASE_URL")
    asyncio.run(main(parser.parse_args().database_url))
