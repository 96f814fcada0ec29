# backend/roadrisk/hospital_lookup.py
"""
Nearest-hospital lookup for the emergency flow.

Candidates come from OpenStreetMap Overpass mirrors, tried in order with a
bounded timeout each. A failing mirror falls through to the next one; when
all of them fail a placeholder hospital is used. Nothing here raises.
"""

import math
from typing import Any, Dict, List, Optional

import requests

from .config import HOSPITAL_RADIUS_M, HOSPITAL_TIMEOUT_SEC, OVERPASS_URLS
from .geo import parse_coordinate, planar_distance_km
from .logging_setup import logger

PLACEHOLDER_NAME = "City General Hospital"
PLACEHOLDER_OFFSET_DEG = 0.01
MINUTES_PER_KM = 2.5
DISPATCH_MINUTES = 2


def build_overpass_query(lat: float, lng: float, radius_m: int) -> str:
    around = f"(around:{int(radius_m)},{lat},{lng})"
    return (
        f"[out:json][timeout:{int(math.ceil(HOSPITAL_TIMEOUT_SEC))}];"
        f'(node["amenity"="hospital"]{around};'
        f'way["amenity"="hospital"]{around};);'
        "out center;"
    )


def parse_overpass_elements(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Turn an Overpass JSON payload into [{name, lat, lng}].
    Ways carry their position under "center". Unnamed elements are dropped.
    Raises ValueError when the payload has no element list.
    """
    elements = payload.get("elements") if isinstance(payload, dict) else None
    if not isinstance(elements, list):
        raise ValueError("overpass payload without elements")

    candidates = []
    for el in elements:
        if not isinstance(el, dict):
            continue
        name = (el.get("tags") or {}).get("name")
        point = el if "lat" in el else el.get("center") or {}
        if not name or "lat" not in point or "lon" not in point:
            continue
        try:
            c_lat, c_lng = float(point["lat"]), float(point["lon"])
        except (TypeError, ValueError):
            continue
        if math.isfinite(c_lat) and math.isfinite(c_lng):
            candidates.append({"name": name, "lat": c_lat, "lng": c_lng})
    return candidates


def fetch_hospital_candidates(
    lat: float,
    lng: float,
    urls: Optional[List[str]] = None,
    timeout: Optional[float] = None,
    radius_m: Optional[int] = None,
) -> Optional[List[Dict[str, Any]]]:
    """
    Ask each mirror in turn. Returns the candidate list from the first mirror
    that answers with a parsable payload, or None if every mirror failed.
    """
    urls = OVERPASS_URLS if urls is None else urls
    timeout = HOSPITAL_TIMEOUT_SEC if timeout is None else timeout
    query = build_overpass_query(lat, lng, radius_m or HOSPITAL_RADIUS_M)

    for url in urls:
        try:
            resp = requests.post(url, data={"data": query}, timeout=timeout)
            resp.raise_for_status()
            candidates = parse_overpass_elements(resp.json())
            logger.info(f"[hospital_lookup] {url} returned {len(candidates)} candidate(s)")
            return candidates
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"[hospital_lookup] mirror {url} failed: {e}")
    return None


def eta_minutes(distance_km: float) -> int:
    return int(math.ceil(distance_km * MINUTES_PER_KM)) + DISPATCH_MINUTES


def placeholder_hospital(lat: float, lng: float) -> Dict[str, Any]:
    return {
        "name": PLACEHOLDER_NAME,
        "lat": lat + PLACEHOLDER_OFFSET_DEG,
        "lng": lng + PLACEHOLDER_OFFSET_DEG,
    }


def rank_candidates(lat: float, lng: float, candidates: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Candidates sorted by distance from the point, each with distance_km added."""
    ranked = []
    for c in candidates:
        ranked.append(dict(c, distance_km=planar_distance_km(lat, lng, c["lat"], c["lng"])))
    ranked.sort(key=lambda c: c["distance_km"])
    return ranked


def find_nearest_hospital(lat: float, lng: float, **fetch_kwargs) -> Dict[str, Any]:
    """
    Nearest hospital as shown to the driver:
    {name, distance, eta, coordinates: {lat, lng}, distance_km, eta_minutes, source}
    """
    lat = parse_coordinate(lat)
    lng = parse_coordinate(lng)
    candidates = fetch_hospital_candidates(lat, lng, **fetch_kwargs)
    source = "overpass"
    if not candidates:
        if candidates is None:
            logger.warning("[hospital_lookup] all mirrors failed, using placeholder")
        source = "placeholder"
        candidates = [placeholder_hospital(lat, lng)]

    best = rank_candidates(lat, lng, candidates)[0]
    minutes = eta_minutes(best["distance_km"])
    return {
        "name": best["name"],
        "distance": f"{best['distance_km']:.1f} km",
        "eta": f"{minutes} mins",
        "coordinates": {"lat": best["lat"], "lng": best["lng"]},
        "distance_km": round(best["distance_km"], 3),
        "eta_minutes": minutes,
        "source": source,
    }
