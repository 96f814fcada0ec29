"""
scripts/seed_zones.py

Create the tables and seed accident zones into the configured database.

Usage:
    python -m scripts.seed_zones
    python -m scripts.seed_zones --csv data/accident_zones.csv
"""

import argparse
from pathlib import Path

from backend.roadrisk.config import DATABASE_URL, ZONES_CSV_PATH
from backend.roadrisk.db_models import SessionLocal, init_db
from backend.roadrisk.seed import seed_zones


def main():
    parser = argparse.ArgumentParser(description="Seed accident zones (no-op if zones exist)")
    parser.add_argument("--csv", type=Path, default=ZONES_CSV_PATH)
    args = parser.parse_args()

    init_db()
    db = SessionLocal()
    try:
        inserted = seed_zones(db, path=args.csv)
    finally:
        db.close()
    print(f"[seed_zones] {inserted} zone(s) inserted into {DATABASE_URL}")


if __name__ == "__main__":
    main()
