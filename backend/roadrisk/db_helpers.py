# backend/roadrisk/db_helpers.py
from typing import Optional, Dict, Any, List
from sqlalchemy.orm import Session
from .db_models import AccidentZone, BehaviorLog, EmergencyAlert
from .logging_setup import logger


def _iso(dt) -> Optional[str]:
    return dt.isoformat() + "Z" if dt else None


def zone_to_dict(z: AccidentZone) -> Dict[str, Any]:
    return {
        "id": z.id,
        "location_name": z.location_name,
        "latitude": z.latitude,
        "longitude": z.longitude,
        "risk_level": z.risk_level,
        "city": z.city,
        "accident_count": z.accident_count,
        "description": z.description,
    }


def log_to_dict(r: BehaviorLog) -> Dict[str, Any]:
    return {
        "id": r.id,
        "event_type": r.event_type,
        "score_deduction": r.score_deduction,
        "timestamp": _iso(r.timestamp),
    }


def alert_to_dict(a: EmergencyAlert) -> Dict[str, Any]:
    return {
        "id": a.id,
        "location": a.location,
        "hospital_name": a.hospital_name,
        "status": a.status,
        "triggered_at": _iso(a.triggered_at),
    }


def _commit(db: Session, record, what: str):
    try:
        db.add(record)
        db.commit()
        db.refresh(record)
        return record
    except Exception as e:
        db.rollback()
        logger.error(f"[db_helpers] insert {what} failed: {e}", exc_info=True)
        raise


# ----- Accident zones -----
def list_zones(db: Session) -> List[Dict[str, Any]]:
    rows = db.query(AccidentZone).order_by(AccidentZone.id).all()
    return [zone_to_dict(z) for z in rows]


def count_zones(db: Session) -> int:
    return db.query(AccidentZone).count()


def create_zone(
    db: Session,
    location_name: str,
    latitude: str,
    longitude: str,
    risk_level: str,
    city: str = "Unknown",
    accident_count: int = 0,
    description: Optional[str] = None,
) -> Dict[str, Any]:
    record = AccidentZone(
        location_name=location_name,
        latitude=str(latitude),
        longitude=str(longitude),
        risk_level=risk_level,
        city=city or "Unknown",
        accident_count=int(accident_count or 0),
        description=description,
    )
    _commit(db, record, f"zone {location_name}")
    logger.info(f"[db_helpers] Inserted zone id={record.id} ({location_name}, {risk_level})")
    return zone_to_dict(record)


# ----- Behaviour logs -----
def list_behavior_logs(db: Session) -> List[Dict[str, Any]]:
    rows = db.query(BehaviorLog).order_by(BehaviorLog.timestamp.desc(), BehaviorLog.id.desc()).all()
    return [log_to_dict(r) for r in rows]


def append_behavior_log(db: Session, event_type: str, score_deduction: int) -> Dict[str, Any]:
    record = BehaviorLog(event_type=event_type, score_deduction=score_deduction)
    _commit(db, record, f"behavior log {event_type}")
    logger.info(f"[db_helpers] Logged {event_type} (-{score_deduction})")
    return log_to_dict(record)


def clear_behavior_logs(db: Session) -> int:
    try:
        deleted = db.query(BehaviorLog).delete()
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"[db_helpers] clear_behavior_logs failed: {e}", exc_info=True)
        raise
    logger.info(f"[db_helpers] Cleared {deleted} behavior log(s)")
    return deleted


# ----- Emergency alerts -----
def create_emergency_alert(db: Session, location: str, hospital_name: str, status: str = "Active") -> Dict[str, Any]:
    record = EmergencyAlert(location=location, hospital_name=hospital_name, status=status)
    _commit(db, record, f"alert at {location}")
    logger.info(f"[db_helpers] Emergency alert id={record.id} at {location} -> {hospital_name}")
    return alert_to_dict(record)


def list_emergency_alerts(db: Session, limit: int = 100) -> List[Dict[str, Any]]:
    rows = (
        db.query(EmergencyAlert)
        .order_by(EmergencyAlert.triggered_at.desc(), EmergencyAlert.id.desc())
        .limit(limit)
        .all()
    )
    return [alert_to_dict(a) for a in rows]
