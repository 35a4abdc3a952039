#!/usr/bin/env python3
"""
Create the NeuralArch Search tables on the database named by DATABASE_URL.

    python setup_database.py            # create missing tables
    python setup_database.py --seed     # ... and insert the sample experiment
    python setup_database.py --reset    # drop everything first
"""

import argparse
import asyncio
import sys

from neuralarch.db import async_database
from neuralarch.db.database import redact_url
from neuralarch.db.seed import seed_sample_data
from neuralarch.middleware.error_handler import NASError


async def setup(reset: bool, seed: bool) -> int:
    if not async_database.is_configured():
        print("❌ DATABASE_URL is not set. Add it to .env or the environment and retry.")
        return 1

    print(f"🔧 Database: {redact_url(async_database.ASYNC_DATABASE_URL)}")
    try:
        if reset:
            await async_database.drop_tables()
            print("🗑️  Dropped existing tables")
        await async_database.create_tables()
        print("✅ Tables created")

        if seed:
            if await seed_sample_data():
                print("🌱 Sample experiment and architectures inserted")
            else:
                print("🌱 Sample data already present")
    except NASError as e:
        print(f"❌ {e.message}")
        return 1
    finally:
        await async_database.dispose_async_engine()

    return 0


def main():
    parser = argparse.ArgumentParser(description="Create the NeuralArch Search database schema")
    parser.add_argument("--seed", action="store_true", help="insert the sample experiment")
    parser.add_argument("--reset", action="store_true", help="drop all tables before creating them")
    args = parser.parse_args()
    return asyncio.run(setup(args.reset, args.seed))


if __name__ == "__main__":
    sys.exit(main())
