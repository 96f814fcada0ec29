# backend/roadrisk/geo.py
"""
Coordinate helpers shared by the risk engine and the emergency flow.

Distances use an equirectangular approximation (1 deg lat ~ 111 km,
1 deg lng ~ 111 * cos(lat) km). Good enough below ~100 km, not geodesic.
"""

import math
import re
from typing import Optional, Tuple

KM_PER_DEGREE = 111.0
# leading decimal with optional exponent, like parseFloat ("1e1x" -> 10)
_NUMERIC_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# ---- Serviceable region (India bounding box) ----
GEOFENCE_MIN_LAT = 6.0
GEOFENCE_MAX_LAT = 38.0
GEOFENCE_MIN_LNG = 68.0
GEOFENCE_MAX_LNG = 98.0

# ---- Reference hubs (major metropolitan centres) ----
HUBS = [
    {"name": "Hyderabad", "lat": 17.3850, "lng": 78.4867},
    {"name": "Bengaluru", "lat": 12.9716, "lng": 77.5946},
    {"name": "Mumbai", "lat": 19.0760, "lng": 72.8777},
    {"name": "Delhi", "lat": 28.6139, "lng": 77.2090},
    {"name": "Chennai", "lat": 13.0827, "lng": 80.2707},
    {"name": "Kolkata", "lat": 22.5726, "lng": 88.3639},
]


def planar_distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Approximate distance in km; the longitude span is scaled by cos(lat1)."""
    d_lat = (lat1 - lat2) * KM_PER_DEGREE
    d_lng = (lng1 - lng2) * KM_PER_DEGREE * math.cos(lat1 * math.pi / 180)
    return math.sqrt(d_lat * d_lat + d_lng * d_lng)


def within_geofence(lat: float, lng: float) -> bool:
    # NaN compares False everywhere, so unparsable points fall outside
    return (GEOFENCE_MIN_LAT <= lat <= GEOFENCE_MAX_LAT
            and GEOFENCE_MIN_LNG <= lng <= GEOFENCE_MAX_LNG)


def nearest_hub(lat: float, lng: float) -> Tuple[Optional[str], float]:
    """Return (hub name, distance km) of the closest hub, or (None, inf)."""
    best_name = None
    best_dist = math.inf
    for hub in HUBS:
        dist = planar_distance_km(lat, lng, hub["lat"], hub["lng"])
        if dist < best_dist:
            best_dist = dist
            best_name = hub["name"]
    return best_name, best_dist


def parse_coordinate(value, default: float = 0.0) -> float:
    """
    Lenient float parsing for query strings and stored decimal strings.
    Accepts a leading numeric prefix ("12.5abc" -> 12.5, "1e1x" -> 10); anything else
    falls back to `default`.
    """
    if value is None:
        return default
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else default
    text = str(value).strip()
    if not text:
        return default
    try:
        parsed = float(text)
        return parsed if math.isfinite(parsed) else default
    except ValueError:
        pass
    match = _NUMERIC_PREFIX.match(text)
    if not match:
        return default
    parsed = float(match.group(0))
    return parsed if math.isfinite(parsed) else default
