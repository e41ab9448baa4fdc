# scripts/init_db.py
from __future__ import annotations

import argparse
import asyncio

from leadhub.config import settings
from leadhub.db import engine, init_schema


async def main() -> None:
    parser = argparse.ArgumentParser(description="Create the leadhub tables")
    parser.add_argument("--drop", action="store_true", help="Drop existing tables first (destroys data)")
    args = parser.parse_args()

    tables = await init_schema(engine, drop=args.drop)
    await engine.dispose()

    action = "recreated" if args.drop else "ensured"
    print(f"{action} {len(tables)} tables on {settings.LEADHUB_DB_URL}: {', '.join(tables)}")


if __name__ == "__main__":
    asyncio.run(main())
