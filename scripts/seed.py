"""Database seeder: rebuilds the schema and loads the bundled dataset."""
import argparse
import asyncio
import logging
import time

from app.config import settings
from app.database import build_engine
from app.seeds import test_data
from app.seeds.seed import seed

DATASETS = {"test": test_data}


async def run(database_url: str, dataset: str) -> None:
    engine = build_engine(database_url, echo=settings.SQL_ECHO)
    start = time.perf_counter()
    try:
        await seed(engine, DATASETS[dataset])
    finally:
        await engine.dispose()
    print(f"Seeding complete in {time.perf_counter() - start:.1f}s")


def main():
    parser = argparse.ArgumentParser(description="Seed the news database")
    parser.add_argument("--dataset", choices=sorted(DATASETS), default="test",
                        help="Dataset to load (default: test)")
    parser.add_argument("--database-url", default=settings.DATABASE_URL,
                        help="Target database URL (default: DATABASE_URL setting)")
    args = parser.parse_args()
    logging.basicConfig(level=settings.LOG_LEVEL)
    asyncio.run(run(args.database_url, args.dataset))


if __name__ == "__main__":
    main()
