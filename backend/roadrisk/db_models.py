# backend/roadrisk/db_models.py
from sqlalchemy import Column, Integer, String, Text, DateTime, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from datetime import datetime
import os

from .config import DATABASE_URL


def make_engine(url: str = DATABASE_URL):
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        db_path = url.split("///", 1)[-1] if "///" in url else ""
        if db_path and db_path != ":memory:":
            os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
    return create_engine(url, connect_args=connect_args)


engine = make_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
Base = declarative_base()


class AccidentZone(Base):
    __tablename__ = "accident_zones"
    id = Column(Integer, primary_key=True, index=True)
    location_name = Column(String, nullable=False)
    # decimal strings, kept as entered
    latitude = Column(String, nullable=False)
    longitude = Column(String, nullable=False)
    risk_level = Column(String, nullable=False)  # High / Medium / Low
    city = Column(String, nullable=False, default="Unknown")
    accident_count = Column(Integer, default=0)
    description = Column(Text, nullable=True)


class BehaviorLog(Base):
    __tablename__ = "behavior_logs"
    id = Column(Integer, primary_key=True, index=True)
    event_type = Column(String, nullable=False)  # braking / speeding / swerving ...
    score_deduction = Column(Integer, nullable=False)
    timestamp = Column(DateTime, default=datetime.utcnow)


class EmergencyAlert(Base):
    __tablename__ = "emergency_alerts"
    id = Column(Integer, primary_key=True, index=True)
    location = Column(String, nullable=False)
    hospital_name = Column(String, nullable=False)
    status = Column(String, nullable=False, default="Active")  # Active / Resolved
    triggered_at = Column(DateTime, default=datetime.utcnow)


def init_db(bind=None):
    Base.metadata.create_all(bind=bind or engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
