from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class CamelModel(BaseModel):
    # camelCase on the wire, snake_case in python
    model_config = ConfigDict(populate_by_name=True)


class AccidentZoneOut(CamelModel):
    id: int
    location_name: str = Field(alias="locationName")
    latitude: str
    longitude: str
    risk_level: str = Field(alias="riskLevel")
    city: str = "Unknown"
    accident_count: Optional[int] = Field(default=0, alias="accidentCount")
    description: Optional[str] = None

class RiskPredictionResponse(CamelModel):
    risk_score: int = Field(alias="riskScore", ge=0, le=100)
    risk_level: str = Field(alias="riskLevel")
    message: str
    nearby_zones: List[AccidentZoneOut] = Field(alias="nearbyZones")

class HeatmapPoint(CamelModel):
    lat: float
    lng: float
    risk_score: int = Field(alias="riskScore")
    risk_level: str = Field(alias="riskLevel")

class HeatmapResponse(BaseModel):
    points: List[HeatmapPoint]
    count: int

class BehaviorLogIn(CamelModel):
    event_type: str = Field(alias="eventType", min_length=1)
    score_deduction: int = Field(alias="scoreDeduction", ge=0)

class BehaviorLogOut(CamelModel):
    id: int
    event_type: str = Field(alias="eventType")
    score_deduction: int = Field(alias="scoreDeduction")
    timestamp: Optional[str]

class DriverScoreResponse(CamelModel):
    current_score: int = Field(alias="currentScore")
    logs: List[BehaviorLogOut]
    badge: str

class LogEventResponse(CamelModel):
    new_score: int = Field(alias="newScore")
    log: BehaviorLogOut

class ResetResponse(BaseModel):
    success: bool

class EmergencyTriggerIn(BaseModel):
    lat: float = Field(allow_inf_nan=False)
    lng: float = Field(allow_inf_nan=False)

class Coordinates(BaseModel):
    lat: float
    lng: float

class NearestHospital(CamelModel):
    name: str
    distance: str
    eta: str
    coordinates: Coordinates

class EmergencyAlertOut(CamelModel):
    id: int
    location: str
    hospital_name: str = Field(alias="hospitalName")
    status: str
    triggered_at: Optional[str] = Field(alias="triggeredAt")

class EmergencyResponse(CamelModel):
    alert: EmergencyAlertOut
    nearest_hospital: NearestHospital = Field(alias="nearestHospital")
