#!/usr/bin/env python3
"""
Load sample meals from data/sample_meals.json into MongoDB.
Each entry goes through MealService.create_meal, so it creates its restaurant too.

Usage:
    python scripts/seed_meals.py          # Interactive mode
    python scripts/seed_meals.py --auto   # Auto mode (skip if meals exist)
"""

import sys
import json
import logging
import argparse
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import ValidationError

from adapters import mongo_adapter
from app.config import settings
from domain.schemas.meal_schemas import MealCreate
from repositories import MealRepository
from services.meal_service import MealService

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("seed_meals")

SAMPLE_FILE = Path(__file__).parent.parent / "data" / "sample_meals.json"


def seed_meals(auto_mode: bool = False) -> bool:
    """Insert the sample meals; returns False when nothing could be loaded."""
    if not SAMPLE_FILE.exists():
        logger.error("Sample file not found: %s", SAMPLE_FILE)
        return False

    with open(SAMPLE_FILE, "r", encoding="utf-8") as f:
        entries = json.load(f)
    logger.info("Loaded %d sample meals from %s", len(entries), SAMPLE_FILE)

    logger.info("Connecting to MongoDB...")
    db = mongo_adapter.connect(
        settings.mongo_uri,
        settings.mongo_db_name,
        timeout_ms=settings.mongo_server_selection_timeout_ms,
    )
    try:
        mongo_adapter.ensure_indexes(db)

        existing = MealRepository(db).count()
        if existing > 0:
            if auto_mode:
                logger.info("Database already holds %d meals (auto mode: skipping)", existing)
                return True
            answer = input(f"Database already holds {existing} meals. Add samples anyway? [y/N]: ")
            if answer.strip().lower() != "y":
                logger.info("Skipping sample import")
                return True

        inserted = 0
        for i, entry in enumerate(entries):
            try:
                payload = MealCreate.model_validate(entry)
            except ValidationError as exc:
                logger.warning("Skipping entry %d: %s", i, exc.errors()[0]["msg"])
                continue
            MealService.create_meal(db, payload)
            inserted += 1

        logger.info("Inserted %d meals", inserted)
        return inserted > 0
    finally:
        mongo_adapter.close()


def main():
    parser = argparse.ArgumentParser(description="Seed MongoDB with sample meals")
    parser.add_argument(
        "--auto", action="store_true", help="Skip without prompting if meals already exist"
    )
    args = parser.parse_args()
    sys.exit(0 if seed_meals(auto_mode=args.auto) else 1)


if __name__ == "__main__":
    main()
