from datetime import datetime, timezone

from heartwise.adapters.base_adapter import HeartRateSource
from heartwise.config import settings
from heartwise.logger import get_logger
from heartwise.utils.models import HeartRateReading

logger = get_logger(__name__)


class StubHeartRateSource(HeartRateSource):
    """
    Stand-in for a smartwatch sensor: always reports the same bpm,
    stamped with the current UTC time.
    """
    def __init__(self, bpm: float = None):
        self.bpm = settings.HEART_RATE_STUB_BPM if bpm is None else bpm

        if self.bpm <= 0:
            raise ValueError("Stub heart rate must be a positive bpm value.")

    def get_reading(self) -> HeartRateReading:
        # TODO: Replace with a call to the smartwatch sensor API once a device adapter exists.
        reading = HeartRateReading(bpm=self.bpm, timestamp=datetime.now(timezone.utc))
        logger.debug(f"Stub heart rate reading: {reading.bpm} bpm at {reading.timestamp.isoformat()}")
        return reading
