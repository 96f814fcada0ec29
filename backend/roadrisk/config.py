# backend/roadrisk/config.py
"""Centralised configuration for the RoadRisk backend (env driven)."""
import os
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=ROOT / ".env")


def _csv_env(name: str, default: str) -> list:
    raw = os.getenv(name, default)
    return [part.strip() for part in raw.split(",") if part.strip()]


# ----- Persistence -----
DATABASE_URL = os.getenv("ROADRISK_DATABASE_URL", f"sqlite:///{ROOT / 'data' / 'roadrisk.sqlite3'}")
SEED_ON_START = os.getenv("ROADRISK_SEED_ON_START", "true").lower() in ("1", "true", "yes")
ZONES_CSV_PATH = Path(os.getenv("ROADRISK_ZONES_CSV", str(ROOT / "data" / "accident_zones.csv")))

# ----- Logging -----
LOG_DIR = os.getenv("ROADRISK_LOG_DIR", "logs")
LOG_LEVEL = os.getenv("ROADRISK_LOG_LEVEL", "INFO").upper()

# ----- HTTP -----
CORS_ORIGINS = _csv_env("ROADRISK_CORS_ORIGINS", "*")

# ----- Hospital lookup -----
OVERPASS_URLS = _csv_env(
    "ROADRISK_OVERPASS_URLS",
    "https://overpass-api.de/api/interpreter,"
    "https://overpass.kumi.systems/api/interpreter,"
    "https://overpass.openstreetmap.ru/api/interpreter",
)
HOSPITAL_TIMEOUT_SEC = float(os.getenv("ROADRISK_HOSPITAL_TIMEOUT_SEC", "8"))
HOSPITAL_RADIUS_M = int(os.getenv("ROADRISK_HOSPITAL_RADIUS_M", "10000"))
