import json
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator
import pytest
from fastapi.testclient import TestClient
import requests

# Import your FastAPI app
from main import app
from heartwise.adapters.base_adapter import HeartRateSource
from heartwise.adapters.stub_adapter import StubHeartRateSource
from heartwise.controller import DashboardController
from heartwise.dependencies import get_controller, get_gateway, get_heart_rate_source
from heartwise.errors import SourceUnavailable
from heartwise.inference.static import StaticGateway
from heartwise.utils.models import HeartRateReading
from heartwise.utils.notifications import NotificationChannel

# ----------------------------- Heart-rate sources -----------------------------
class FailingHeartRateSource(HeartRateSource):
    """A sensor that never answers."""
    def get_reading(self) -> HeartRateReading:
        raise SourceUnavailable("sensor disconnected")

class FixedHeartRateSource(HeartRateSource):
    """Returns the same reading, timestamp included, and counts reads."""
    def __init__(self, bpm: float):
        self.reading = HeartRateReading(bpm=bpm, timestamp=datetime(2025, 8, 14, 10, 0, tzinfo=timezone.utc))
        self.reads = 0
    def get_reading(self) -> HeartRateReading:
        self.reads += 1
        return self.reading

@pytest.fixture
def stub_source() -> StubHeartRateSource:
    """The stock stub at its default 72 bpm."""
    return StubHeartRateSource(bpm=72)

@pytest.fixture
def elevated_source() -> FixedHeartRateSource:
    return FixedHeartRateSource(bpm=130)

@pytest.fixture
def failing_source() -> FailingHeartRateSource:
    return FailingHeartRateSource()

# ----------------------------- Gateway + controller ---------------------------
@pytest.fixture
def static_gateway() -> StaticGateway:
    return StaticGateway()

@pytest.fixture
def notifications() -> NotificationChannel:
    return NotificationChannel()

@pytest.fixture
def controller(stub_source, static_gateway, notifications) -> DashboardController:
    return DashboardController(stub_source, static_gateway, notifications)

# ----------------------------- Core client ----------------------------------
@pytest.fixture
def client(stub_source, static_gateway, controller) -> Iterator[TestClient]:
    """Shared FastAPI TestClient wired to the static gateway and the test controller."""
    app.dependency_overrides[get_heart_rate_source] = lambda: stub_source
    app.dependency_overrides[get_gateway] = lambda: static_gateway
    app.dependency_overrides[get_controller] = lambda: controller
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

# ----------------------------- Gateway payloads -------------------------------
@pytest.fixture
def high_risk_prediction() -> Dict[str, Any]:
    return {
        "riskLevel": "high",
        "estimatedTimeWindow": "within 24 hours",
        "explanation": "Elevated resting heart rate combined with age, smoking and a prior cardiac event.",
    }

@pytest.fixture
def low_risk_prediction() -> Dict[str, Any]:
    return {
        "riskLevel": "low",
        "estimatedTimeWindow": "several years",
        "explanation": "Normal heart rate and no relevant history.",
    }

@pytest.fixture
def low_risk_estimate() -> Dict[str, Any]:
    return {
        "estimatedTimeWindow": "no immediate risk",
        "riskLevel": "low",
        "confidenceLevel": 0.4,
        "rationale": "limited data",
    }

@pytest.fixture
def high_risk_estimate() -> Dict[str, Any]:
    return {
        "estimatedTimeWindow": "hours",
        "riskLevel": "high",
        "confidenceLevel": 0.7,
        "rationale": "Sustained tachycardia with a cardiac history.",
    }

# ----------------------------- HTTP response shim ----------------------------
class _Resp:
    def __init__(self, status_code: int, json_obj: Dict[str, Any]):
        self.status_code = status_code
        self._json = json_obj
        self.text = json.dumps(json_obj)
    def json(self) -> Dict[str, Any]: return self._json
    def raise_for_status(self):
        if not (200 <= self.status_code < 300):
            raise requests.exceptions.HTTPError(f"HTTP {self.status_code}", response=self)

@pytest.fixture
def make_response() -> Callable[[int, Dict[str, Any]], _Resp]:
    def _make(status: int, body: Dict[str, Any]) -> _Resp: return _Resp(status, body)
    return _make
