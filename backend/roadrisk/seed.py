# backend/roadrisk/seed.py
"""
Idempotent seeding of the accident zone table.

Zones come from a CSV (ROADRISK_ZONES_CSV) when it exists, otherwise from the
built-in defaults below. Seeding only happens when the table is empty.
"""

import os
from typing import Any, Dict, List

import pandas as pd
from sqlalchemy.orm import Session

from .config import ZONES_CSV_PATH
from .db_helpers import count_zones, create_zone
from .logging_setup import logger

REQUIRED_COLUMNS = ["location_name", "latitude", "longitude", "risk_level"]
VALID_LEVELS = {"High", "Medium", "Low"}

DEFAULT_ZONES = [
    {
        "location_name": "Silk Board Junction, Bengaluru",
        "latitude": "12.9176",
        "longitude": "77.6233",
        "risk_level": "High",
        "city": "Bengaluru",
        "accident_count": 45,
        "description": "Extremely high traffic density and complex merging lanes.",
    },
    {
        "location_name": "Western Express Highway, Mumbai",
        "latitude": "19.0760",
        "longitude": "72.8777",
        "risk_level": "High",
        "city": "Mumbai",
        "accident_count": 38,
        "description": "High speed corridor with frequent lane cutting incidents.",
    },
    {
        "location_name": "Connaught Place, Delhi",
        "latitude": "28.6315",
        "longitude": "77.2167",
        "risk_level": "Medium",
        "city": "Delhi",
        "accident_count": 12,
        "description": "Heavy pedestrian movement and chaotic circular traffic.",
    },
    {
        "location_name": "Outer Ring Road, Hyderabad",
        "latitude": "17.3850",
        "longitude": "78.4867",
        "risk_level": "Medium",
        "city": "Hyderabad",
        "accident_count": 15,
        "description": "Speeding violations common during night hours.",
    },
]


def load_zones_csv(path=ZONES_CSV_PATH) -> List[Dict[str, Any]]:
    """
    Loads accident zones CSV. Coordinates stay strings so stored precision
    matches the file.
    Required columns: location_name, latitude, longitude, risk_level
    Optional: city, accident_count, description
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Zones CSV not found at {path}")
    df = pd.read_csv(path, dtype={"latitude": str, "longitude": str})
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"zones CSV missing columns: {missing}")

    optional_defaults = {"city": "Unknown", "accident_count": 0, "description": None}
    for col, default in optional_defaults.items():
        if col not in df.columns:
            df[col] = default
    df["city"] = df["city"].fillna("Unknown")
    df["accident_count"] = df["accident_count"].fillna(0).astype(int)
    df["description"] = df["description"].astype(object).where(df["description"].notna(), None)

    bad = df[~df["risk_level"].isin(VALID_LEVELS)]
    if not bad.empty:
        logger.warning(f"[seed] Dropping {len(bad)} zone(s) with unknown risk_level")
        df = df[df["risk_level"].isin(VALID_LEVELS)]

    return df[REQUIRED_COLUMNS + list(optional_defaults)].to_dict(orient="records")


def seed_zones(db: Session, path=ZONES_CSV_PATH) -> int:
    """Insert default zones if the table is empty. Returns rows inserted."""
    existing = count_zones(db)
    if existing:
        logger.info(f"[seed] {existing} zone(s) present, skipping seed")
        return 0

    try:
        zones = load_zones_csv(path)
        logger.info(f"[seed] Loaded {len(zones)} zone(s) from {path}")
    except (FileNotFoundError, ValueError) as e:
        logger.warning(f"[seed] {e}; using built-in defaults")
        zones = DEFAULT_ZONES

    for z in zones:
        create_zone(db, **z)
    logger.info(f"[seed] Seeded {len(zones)} accident zone(s)")
    return len(zones)
