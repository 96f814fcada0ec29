from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from .db_models import get_db
from .db_helpers import (
    list_zones, count_zones,
    list_behavior_logs, append_behavior_log, clear_behavior_logs,
    create_emergency_alert, list_emergency_alerts,
)
from .driver_score import compute_driver_score, driver_summary
from .geo import parse_coordinate
from .heatmap import risk_grid, DEFAULT_STEPS, MIN_STEPS, MAX_STEPS
from .hospital_lookup import find_nearest_hospital
from .logging_setup import logger
from .risk_compute import compute_point_risk, adjust_zones_for_conditions, DEFAULT_TIME, DEFAULT_WEATHER
from .schemas import (
    AccidentZoneOut, RiskPredictionResponse, HeatmapResponse,
    BehaviorLogIn, DriverScoreResponse, LogEventResponse, ResetResponse,
    EmergencyTriggerIn, EmergencyResponse, EmergencyAlertOut,
)

router = APIRouter()


def _load_zones(db: Session):
    try:
        return list_zones(db)
    except Exception as e:
        logger.error(f"[api] zone fetch failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to fetch accident zones: {e}")


@router.get("/health")
def health(db: Session = Depends(get_db)):
    try:
        zones = count_zones(db)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Database unavailable: {e}")
    return {"status": "ok", "zones": zones}


# ----- Risk -----
@router.get("/api/risk/predict", response_model=RiskPredictionResponse)
def predict_risk(
    lat: Optional[str] = None,
    lng: Optional[str] = None,
    time: Optional[str] = None,
    weather: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    Score a point. Every parameter is optional; bad numbers fall back to 0
    and an unparsable time matches no time bracket.
    """
    zones = _load_zones(db)
    result = compute_point_risk(
        parse_coordinate(lat),
        parse_coordinate(lng),
        time or DEFAULT_TIME,
        weather or DEFAULT_WEATHER,
        zones,
    )
    logger.info(
        f"[api] predict lat={lat} lng={lng} time={time} weather={weather} "
        f"-> {result['risk_score']} ({result['risk_level']})"
    )
    return result


@router.get("/api/risk/zones", response_model=List[AccidentZoneOut])
def risk_zones(time: Optional[str] = None, weather: Optional[str] = None, db: Session = Depends(get_db)):
    zones = _load_zones(db)
    return adjust_zones_for_conditions(zones, time or DEFAULT_TIME, weather or DEFAULT_WEATHER)


@router.get("/api/risk/heatmap", response_model=HeatmapResponse)
def risk_heatmap(
    min_lat: float,
    max_lat: float,
    min_lng: float,
    max_lng: float,
    time: Optional[str] = None,
    weather: Optional[str] = None,
    steps: int = Query(DEFAULT_STEPS, ge=MIN_STEPS, le=MAX_STEPS),
    db: Session = Depends(get_db),
):
    zones = _load_zones(db)
    return risk_grid(min_lat, max_lat, min_lng, max_lng, zones,
                     time or DEFAULT_TIME, weather or DEFAULT_WEATHER, steps)


# ----- Driver behaviour -----
@router.get("/api/driver/score", response_model=DriverScoreResponse)
def driver_score(db: Session = Depends(get_db)):
    try:
        logs = list_behavior_logs(db)
    except Exception as e:
        logger.error(f"[api] behavior log fetch failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to fetch driver logs: {e}")
    return driver_summary(logs)


@router.post("/api/driver/log", response_model=LogEventResponse, status_code=201)
def log_driver_event(payload: BehaviorLogIn, db: Session = Depends(get_db)):
    try:
        log = append_behavior_log(db, payload.event_type, payload.score_deduction)
        new_score = compute_driver_score(list_behavior_logs(db))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to log driver event: {e}")
    return {"new_score": new_score, "log": log}


@router.post("/api/driver/reset", response_model=ResetResponse)
def reset_driver(db: Session = Depends(get_db)):
    try:
        clear_behavior_logs(db)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to reset driver logs: {e}")
    return {"success": True}


# ----- Emergency -----
@router.post("/api/emergency/trigger", response_model=EmergencyResponse)
def trigger_emergency(payload: EmergencyTriggerIn, db: Session = Depends(get_db)):
    hospital = find_nearest_hospital(payload.lat, payload.lng)
    try:
        alert = create_emergency_alert(
            db,
            location=f"{payload.lat:.4f}, {payload.lng:.4f}",
            hospital_name=hospital["name"],
            status="Active",
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to record emergency alert: {e}")
    logger.info(f"[api] emergency at {alert['location']} -> {hospital['name']} ({hospital['eta']})")
    return {"alert": alert, "nearest_hospital": hospital}


@router.get("/api/emergency/alerts", response_model=List[EmergencyAlertOut])
def emergency_alerts(limit: int = Query(100, ge=1, le=1000), db: Session = Depends(get_db)):
    try:
        return list_emergency_alerts(db, limit=limit)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to fetch alerts: {e}")
