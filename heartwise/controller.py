"""
Dashboard controller: the view state behind the HeartWise watch face.

States move idle -> loading -> ready, and on to alert_raised whenever the risk
level an action resolves is "high". The alert stays raised until the user
dismisses it. Failed actions leave every field untouched. Only one action
may be in flight at a time.
"""

from typing import Optional

from heartwise.adapters.base_adapter import HeartRateSource
from heartwise.config import settings
from heartwise.errors import ActionInProgress
from heartwise.flows.estimate_time import estimate_time_to_heart_attack
from heartwise.flows.predict_risk import predict_heart_attack_risk
from heartwise.inference.base import StructuredInferenceGateway
from heartwise.logger import get_logger
from heartwise.utils.models import (
    DashboardState,
    EstimationRequest,
    Notification,
    PredictionRequest,
    RiskLevel,
    RiskPrediction,
    TimeEstimate,
    ViewStatus,
)
from heartwise.utils.notifications import NotificationChannel

logger = get_logger(__name__)

HIGH_RISK_TITLE = "High Risk Detected"
HIGH_RISK_DESCRIPTION = "A high heart attack risk has been detected. Please seek medical attention immediately."


class DashboardController:

    def __init__(
        self,
        source: HeartRateSource,
        gateway: StructuredInferenceGateway,
        notifications: NotificationChannel,
        user_data: str = None,
    ):
        self.source = source
        self.gateway = gateway
        self.notifications = notifications

        self.status = ViewStatus.IDLE
        self.heart_rate: float = settings.HEART_RATE_STUB_BPM
        self.risk_level: RiskLevel = "low"
        self.estimated_time = "N/A"
        self.user_data = settings.DEFAULT_USER_DATA if user_data is None else user_data
        self.alert_visible = False
        self.last_prediction: Optional[RiskPrediction] = None
        self.last_estimate: Optional[TimeEstimate] = None

    @property
    def loading(self) -> bool:
        return self.status == ViewStatus.LOADING

    def load_heart_rate(self) -> float:
        reading = self.source.get_reading()
        self.heart_rate = reading.bpm
        logger.info(f"Dashboard heart rate set to {self.heart_rate} bpm")
        return self.heart_rate

    def update_user_data(self, user_data: str) -> None:
        self.user_data = user_data

    def dismiss_alert(self) -> None:
        self.alert_visible = False
        if self.status == ViewStatus.ALERT_RAISED:
            self.status = ViewStatus.READY

    def _begin(self, action: str) -> ViewStatus:
        if self.loading:
            raise ActionInProgress(f"Cannot {action} while another request is in flight.")
        previous = self.status
        self.status = ViewStatus.LOADING
        return previous

    def _settled_status(self) -> ViewStatus:
        # Only dismiss_alert clears alert_visible
        return ViewStatus.ALERT_RAISED if self.alert_visible else ViewStatus.READY

    def _fail(self, previous: ViewStatus, description: str, error: Exception) -> None:
        logger.error(f"{description} Error: {error}")
        self.status = ViewStatus.IDLE if previous == ViewStatus.IDLE else self._settled_status()
        self.notifications.emit(Notification(title="Error", description=description, variant="destructive"))

    def _resolve(self, risk_level: RiskLevel, estimated_time: str) -> None:
        self.risk_level = risk_level
        self.estimated_time = estimated_time
        if risk_level == "high":
            self.alert_visible = True
            self.status = ViewStatus.ALERT_RAISED
            self.notifications.emit(
                Notification(title=HIGH_RISK_TITLE, description=HIGH_RISK_DESCRIPTION, variant="destructive")
            )
            logger.warning("High heart attack risk detected, alert raised")
        else:
            self.status = self._settled_status()

    async def predict_risk(self) -> RiskPrediction:
        previous = self._begin("predict risk")
        try:
            prediction = await predict_heart_attack_risk(
                PredictionRequest(user_data=self.user_data), self.source, self.gateway
            )
        except Exception as e:
            self._fail(previous, "Failed to predict risk. Please try again.", e)
            raise

        self.last_prediction = prediction
        self._resolve(prediction.risk_level, prediction.estimated_time_window)
        return prediction

    async def estimate_time(self, heart_rate_variability: float = None) -> TimeEstimate:
        previous = self._begin("estimate time")
        try:
            estimate = await estimate_time_to_heart_attack(
                EstimationRequest(
                    heart_rate_bpm=self.heart_rate,
                    heart_rate_variability=heart_rate_variability,
                    user_data=self.user_data,
                ),
                self.source,
                self.gateway,
            )
        except Exception as e:
            self._fail(previous, "Failed to estimate time. Please try again.", e)
            raise

        self.last_estimate = estimate
        self._resolve(estimate.risk_level, estimate.estimated_time_window)
        return estimate

    def snapshot(self) -> DashboardState:
        return DashboardState(
            status=self.status,
            heart_rate=self.heart_rate,
            risk_level=self.risk_level,
            estimated_time=self.estimated_time,
            user_data=self.user_data,
            loading=self.loading,
            alert_visible=self.alert_visible,
            last_prediction=self.last_prediction,
            last_estimate=self.last_estimate,
        )
