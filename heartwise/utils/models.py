from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional

RiskLevel = Literal["low", "medium", "high"]


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# --- Heart rate ---
class HeartRateReading(FrozenCamelModel):
    bpm: float = Field(..., gt=0, description="The heart rate in beats per minute (BPM).")
    timestamp: datetime = Field(..., description="The timestamp of the heart rate measurement.")


# --- Risk prediction ---
class PredictionRequest(CamelModel):
    user_data: str = Field(
        ...,
        description="User-provided data such as age, gender, medical history, and lifestyle information.",
    )


class PredictionPayload(FrozenCamelModel):
    user_data: str
    heart_rate_data: HeartRateReading


class RiskPrediction(FrozenCamelModel):
    risk_level: RiskLevel = Field(..., description="The predicted heart attack risk level.")
    estimated_time_window: str = Field(
        ..., description="An estimated time window before a potential heart attack might occur."
    )
    explanation: str = Field(..., description="Explanation of why the model gave this prediction.")


# --- Time estimation ---
class EstimationRequest(CamelModel):
    heart_rate_bpm: Optional[float] = Field(
        None, gt=0, description="The current heart rate in beats per minute."
    )
    heart_rate_variability: Optional[float] = Field(None, description="The heart rate variability metric.")
    user_data: Optional[str] = Field(
        None, description="Additional user data such as age, gender, medical history."
    )


class EstimationPayload(FrozenCamelModel):
    heart_rate_bpm: float = Field(..., gt=0)
    heart_rate_variability: Optional[float] = None
    user_data: Optional[str] = None


class TimeEstimate(FrozenCamelModel):
    estimated_time_window: str = Field(
        ..., description="An estimated time window (e.g., hours, days, weeks) before a potential heart attack."
    )
    risk_level: RiskLevel = Field(..., description="The risk level of a potential heart attack.")
    confidence_level: float = Field(
        ..., ge=0, le=1, description="A value between 0 and 1 indicating the confidence level."
    )
    rationale: str = Field(..., description="The rationale behind the time window estimation and risk level.")


# --- Dashboard ---
class ViewStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ALERT_RAISED = "alert_raised"


class Notification(FrozenCamelModel):
    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class UserDataUpdate(CamelModel):
    user_data: str


class DashboardState(FrozenCamelModel):
    status: ViewStatus
    heart_rate: float
    risk_level: RiskLevel
    estimated_time: str
    user_data: str
    loading: bool
    alert_visible: bool
    last_prediction: Optional[RiskPrediction] = None
    last_estimate: Optional[TimeEstimate] = None


class NotificationList(CamelModel):
    count: int
    notifications: List[Notification]
