# backend/roadrisk/heatmap.py
from typing import Any, Dict, List, Optional

import numpy as np

from .geo import parse_coordinate
from .risk_compute import compute_point_risk, DEFAULT_TIME, DEFAULT_WEATHER

DEFAULT_STEPS = 10
MIN_STEPS = 2
MAX_STEPS = 50


def _bounded(value, limit: float) -> float:
    # NaN / inf fall back to 0, the rest is clipped to valid degrees
    return max(-limit, min(limit, parse_coordinate(value)))


def risk_grid(
    min_lat: float,
    max_lat: float,
    min_lng: float,
    max_lng: float,
    zones: List[Dict[str, Any]],
    time_str: Optional[str] = DEFAULT_TIME,
    weather: Optional[str] = DEFAULT_WEATHER,
    steps: int = DEFAULT_STEPS,
) -> Dict[str, Any]:
    """
    Score a steps x steps grid spanning the box against one zone snapshot.
    """
    steps = max(MIN_STEPS, min(MAX_STEPS, int(steps)))
    min_lat, max_lat = (_bounded(v, 90.0) for v in (min_lat, max_lat))
    min_lng, max_lng = (_bounded(v, 180.0) for v in (min_lng, max_lng))
    lats = np.linspace(min_lat, max_lat, steps)
    lngs = np.linspace(min_lng, max_lng, steps)

    points = []
    for lat in lats:
        for lng in lngs:
            res = compute_point_risk(float(lat), float(lng), time_str, weather, zones)
            points.append({
                "lat": float(lat),
                "lng": float(lng),
                "risk_score": res["risk_score"],
                "risk_level": res["risk_level"],
            })

    return {"points": points, "count": len(points)}
