from typing import Optional

from fastapi import APIRouter, Depends

from heartwise.controller import DashboardController
from heartwise.dependencies import get_controller, http_error_for
from heartwise.errors import HeartWiseError
from heartwise.logger import get_logger
from heartwise.utils.models import DashboardState, NotificationList, UserDataUpdate

logger = get_logger(__name__)

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardState)
def read_dashboard(controller: DashboardController = Depends(get_controller)):
    return controller.snapshot()


@router.put("/user-data", response_model=DashboardState)
def update_user_data(body: UserDataUpdate, controller: DashboardController = Depends(get_controller)):
    controller.update_user_data(body.user_data)
    return controller.snapshot()


@router.post("/predict", response_model=DashboardState)
async def run_prediction(controller: DashboardController = Depends(get_controller)):
    """Runs "Predict Risk" against the stored user data and returns the new state."""
    try:
        await controller.predict_risk()
    except HeartWiseError as e:
        raise http_error_for(e)
    return controller.snapshot()


@router.post("/estimate", response_model=DashboardState)
async def run_estimation(
    heart_rate_variability: Optional[float] = None,
    controller: DashboardController = Depends(get_controller),
):
    """Runs "Estimate Time" with the dashboard's heart rate and user data."""
    try:
        await controller.estimate_time(heart_rate_variability=heart_rate_variability)
    except HeartWiseError as e:
        raise http_error_for(e)
    return controller.snapshot()


@router.post("/alert/dismiss", response_model=DashboardState)
def dismiss_alert(controller: DashboardController = Depends(get_controller)):
    controller.dismiss_alert()
    return controller.snapshot()


@router.get("/notifications", response_model=NotificationList)
def drain_notifications(controller: DashboardController = Depends(get_controller)):
    """Returns and clears the notices emitted since the last call."""
    notifications = controller.notifications.drain()
    logger.info(f"Delivering {len(notifications)} notifications.")
    return NotificationList(count=len(notifications), notifications=notifications)
