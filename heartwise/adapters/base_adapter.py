from abc import ABC, abstractmethod

from heartwise.utils.models import HeartRateReading

class HeartRateSource(ABC):
    """
    An abstract base class that defines the standard interface for every
    heart-rate source, whether a stub or a wearable sensor.
    """

    @abstractmethod
    def get_reading(self) -> HeartRateReading:
        """
        Returns a fresh reading stamped with the time of measurement.
        Raises SourceUnavailable when the device cannot be read.
        """
        pass
