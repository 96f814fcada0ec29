# backend/roadrisk/risk_compute.py
"""
Risk computation utilities, estimate:
1. Point risk score (0-100) for a location, time of day and weather
2. Risk level (Safe / Medium / High) from a score
3. Time/weather adjusted display levels for the accident zone list

Everything here is pure and deterministic. Bad inputs degrade through the
parse fallbacks instead of raising.
"""

import math
import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .geo import nearest_hub, parse_coordinate, planar_distance_km, within_geofence

# ---- Tunable constants ----
BASE_RISK = 10
NIGHT_PENALTY = 20
PEAK_PENALTY = 10
RAIN_PENALTY = 15
FOG_PENALTY = 10

HUB_RADIUS_KM = 50.0
HUB_BONUS = {
    "Hyderabad": 15,
    "Delhi": 15,
    "Mumbai": 10,
    "Bengaluru": 10,
    "Kolkata": 10,
    "Chennai": 5,
}

ZONE_RADIUS_KM = 10.0
ZONE_BASE_PENALTY = {"High": 50, "Medium": 25, "Low": 10}
CRITICAL_PENALTY = 30
CAUTION_PENALTY = 15

OUT_OF_REGION_SCORE = 85
JITTER_AMPLITUDE = 5.0

HIGH_THRESHOLD = 75
MEDIUM_THRESHOLD = 40

DEFAULT_TIME = "12:00"
DEFAULT_WEATHER = "Clear"
DEFAULT_MESSAGE = "System monitoring active."
OUT_OF_REGION_MESSAGE = "WARNING: Vehicle outside standard safety monitoring zone."

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ---- 1. Input parsing ----
def parse_hour(time_str: Optional[str]) -> float:
    """
    Integer hour before the first colon ("23:30" -> 23).
    Returns NaN when no leading integer is present; NaN matches no bracket.
    """
    head = (time_str or DEFAULT_TIME).split(":")[0]
    match = _LEADING_INT.match(head)
    if not match:
        return math.nan
    return float(int(match.group(1)))


def is_night(hour: float) -> bool:
    return hour >= 22 or hour <= 5


def is_peak(hour: float) -> bool:
    return 8 <= hour <= 10 or 17 <= hour <= 20


def time_penalty(hour: float) -> int:
    if is_night(hour):
        return NIGHT_PENALTY
    if is_peak(hour):
        return PEAK_PENALTY
    return 0


def weather_penalty(weather: Optional[str]) -> int:
    text = (weather or DEFAULT_WEATHER).lower()
    if "rain" in text:
        return RAIN_PENALTY
    if "fog" in text:
        return FOG_PENALTY
    return 0


# ---- 2. Zone proximity ----
def zone_penalty(distance_km: float, risk_level: str) -> float:
    """Linearly decaying penalty inside ZONE_RADIUS_KM, 0 outside."""
    if not distance_km < ZONE_RADIUS_KM:
        return 0.0
    base = ZONE_BASE_PENALTY.get(risk_level, ZONE_BASE_PENALTY["Low"])
    return base * (1 - distance_km / ZONE_RADIUS_KM)


def max_zone_penalty(lat: float, lng: float, zones: Iterable[Dict[str, Any]]) -> Tuple[float, str]:
    """Largest single-zone penalty and the zone that produced it (no summing)."""
    penalty = 0.0
    zone_name = ""
    for zone in zones:
        z_lat = parse_coordinate(zone.get("latitude"), default=math.nan)
        z_lng = parse_coordinate(zone.get("longitude"), default=math.nan)
        if math.isnan(z_lat) or math.isnan(z_lng):
            continue
        distance = planar_distance_km(lat, lng, z_lat, z_lng)
        current = zone_penalty(distance, zone.get("risk_level", "Low"))
        if current > penalty:
            penalty = current
            zone_name = zone.get("location_name", "")
    return penalty, zone_name


def coordinate_jitter(lat: float, lng: float) -> float:
    """Smooth, reproducible perturbation so neighbouring points differ."""
    return (math.sin(lat * 10) + math.cos(lng * 10)) * JITTER_AMPLITUDE


# ---- 3. Risk level ----
def classify_risk_level(score: float) -> str:
    if score >= HIGH_THRESHOLD:
        return "High"
    if score >= MEDIUM_THRESHOLD:
        return "Medium"
    return "Safe"


# ---- 4. Risk score ----
def compute_point_risk(
    lat: float,
    lng: float,
    time_str: Optional[str] = DEFAULT_TIME,
    weather: Optional[str] = DEFAULT_WEATHER,
    zones: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """
    Score a point against the accident zone set.

    Parameters:
        lat, lng: query point in degrees (0, 0 means unknown location)
        time_str: "HH:MM", only the hour is used
        weather: free text, matched on "rain" / "fog"
        zones: accident zone dicts (location_name, latitude, longitude, risk_level)

    Returns a dict with risk_score (int 0-100), risk_level, message and
    nearby_zones (the input list, unfiltered).
    """
    zones = zones if zones is not None else []
    # NaN / inf collapse to the 0, 0 "unknown location"
    lat = parse_coordinate(lat)
    lng = parse_coordinate(lng)
    in_region = within_geofence(lat, lng)

    hub_name, hub_distance = nearest_hub(lat, lng)
    hour = parse_hour(time_str)

    calculated = BASE_RISK + time_penalty(hour) + weather_penalty(weather)
    if hub_distance < HUB_RADIUS_KM:
        calculated += HUB_BONUS.get(hub_name, 0)

    proximity, zone_name = max_zone_penalty(lat, lng, zones)
    score = _round_half_up(calculated + proximity)

    message = DEFAULT_MESSAGE
    if proximity > CRITICAL_PENALTY:
        message = f"CRITICAL: Approaching High-Risk zone ({zone_name})."
    elif proximity > CAUTION_PENALTY:
        message = f"CAUTION: Near Accident-Prone area ({zone_name})."

    # region override goes last so jitter is applied on top of 85
    if not in_region:
        score = OUT_OF_REGION_SCORE
        message = OUT_OF_REGION_MESSAGE

    final = _round_half_up(score + coordinate_jitter(lat, lng))
    final = max(0, min(100, final))

    return {
        "risk_score": final,
        "risk_level": classify_risk_level(final),
        "message": message,
        "nearby_zones": zones,
    }


# ---- 5. Display levels for the zone list ----
def adjust_zone_level(risk_level: str, hour: float, weather: Optional[str]) -> str:
    """
    Night (>=21 or <=5) lifts one tier. Rain lifts a stored Medium to High;
    it never stacks on the night lift, so Low tops out at Medium.
    """
    level = risk_level
    if hour >= 21 or hour <= 5:
        if level == "Medium":
            level = "High"
        elif level == "Low":
            level = "Medium"
    if "rain" in (weather or DEFAULT_WEATHER).lower() and risk_level == "Medium":
        level = "High"
    return level


def adjust_zones_for_conditions(
    zones: List[Dict[str, Any]],
    time_str: Optional[str] = DEFAULT_TIME,
    weather: Optional[str] = DEFAULT_WEATHER,
) -> List[Dict[str, Any]]:
    """Display-only copies of the zones with adjusted risk_level."""
    hour = parse_hour(time_str)
    adjusted = []
    for zone in zones:
        copy = dict(zone)
        copy["risk_level"] = adjust_zone_level(zone.get("risk_level", "Low"), hour, weather)
        adjusted.append(copy)
    return adjusted
