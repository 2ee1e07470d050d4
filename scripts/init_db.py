#!/usr/bin/env python3
"""
Standalone database initialization script.
Creates the tables and, unless --no-seed is given, seeds the demo catalog.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("init_db")


def init_tables() -> bool:
    """Create every table and report what exists afterwards."""
    from sqlalchemy import inspect

    from domain.models.database import engine, init_database

    try:
        init_database()
        tables = inspect(engine).get_table_names()
        logger.info(f"Created {len(tables)} tables: {', '.join(sorted(tables))}")
        return True
    except Exception as e:
        logger.exception(f"Failed to initialize database: {e}")
        return False


def seed() -> bool:
    from domain.models import SessionLocal
    from services.seed_service import SeedService

    db = SessionLocal()
    try:
        logger.info(SeedService.seed(db))
        return True
    except Exception as e:
        logger.exception(f"Failed to seed database: {e}")
        return False
    finally:
        db.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Initialize the CampusFood database")
    parser.add_argument(
        "--no-seed", action="store_true", help="Create tables without demo data"
    )
    args = parser.parse_args(argv)

    if not init_tables():
        return 1
    if not args.no_seed and not seed():
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
