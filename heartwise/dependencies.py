from functools import lru_cache

from fastapi import HTTPException, Request

from heartwise.adapters.base_adapter import HeartRateSource
from heartwise.adapters.stub_adapter import StubHeartRateSource
from heartwise.config import settings
from heartwise.controller import DashboardController
from heartwise.errors import ActionInProgress, GatewayFailure, HeartWiseError, SourceUnavailable
from heartwise.inference.base import StructuredInferenceGateway
from heartwise.inference.static import StaticGateway
from heartwise.logger import get_logger
from heartwise.utils.notifications import NotificationChannel

logger = get_logger(__name__)


def build_gateway(backend: str = None) -> StructuredInferenceGateway:
    """Pick the inference backend named in settings."""
    backend = backend or settings.INFERENCE_BACKEND
    if backend == "static":
        return StaticGateway()
    if backend == "openai":
        # Imported lazily so the static backend runs without the OpenAI client configured
        from heartwise.agent import LangChainGateway
        return LangChainGateway()
    raise ValueError(f"Unknown inference backend: {backend}")


def build_controller() -> DashboardController:
    return DashboardController(
        source=get_heart_rate_source(),
        gateway=get_gateway(),
        notifications=NotificationChannel(),
    )


#-------- FastAPI dependencies --------
@lru_cache(maxsize=1)
def get_heart_rate_source() -> HeartRateSource:
    return StubHeartRateSource()


@lru_cache(maxsize=1)
def get_gateway() -> StructuredInferenceGateway:
    gateway = build_gateway()
    logger.info(f"Using the {gateway.name} inference backend")
    return gateway


def get_controller(request: Request) -> DashboardController:
    """The controller created at startup and kept on the app state."""
    controller = getattr(request.app.state, "controller", None)
    if controller is None:
        controller = build_controller()
        request.app.state.controller = controller
    return controller


def http_error_for(error: HeartWiseError) -> HTTPException:
    """Translate an application error into the HTTP error the routes raise."""
    if isinstance(error, ActionInProgress):
        return HTTPException(status_code=409, detail=str(error))
    if isinstance(error, SourceUnavailable):
        return HTTPException(status_code=503, detail=f"Heart rate unavailable: {error}")
    if isinstance(error, GatewayFailure):
        return HTTPException(status_code=502, detail=f"Inference failed: {error}")
    return HTTPException(status_code=500, detail=str(error))
