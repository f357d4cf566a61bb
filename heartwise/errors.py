"""Exception hierarchy shared by the flows, the controller and the routes."""


class HeartWiseError(Exception):
    """Base class for all application errors."""
    pass


class SourceUnavailable(HeartWiseError):
    """The heart-rate source could not produce a reading."""
    pass


class GatewayFailure(HeartWiseError):
    """The inference backend raised, timed out, or returned unusable output."""

    def __init__(self, capability: str, message: str):
        self.capability = capability
        super().__init__(f"{capability}: {message}")


class ValidationMismatch(GatewayFailure):
    """The backend answered, but the answer breaks the output contract."""
    pass


class ActionInProgress(HeartWiseError):
    """Another dashboard action is still waiting for the model."""
    pass
