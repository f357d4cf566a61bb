from collections import defaultdict, deque
from typing import Any, Dict, List

from heartwise.inference.base import InferenceRequest, StructuredInferenceGateway
from heartwise.logger import get_logger

logger = get_logger(__name__)

# Answers served when nothing was queued for a capability
CANNED_RESPONSES: Dict[str, Dict[str, Any]] = {
    "predictHeartAttackRisk": {
        "riskLevel": "low",
        "estimatedTimeWindow": "no immediate risk",
        "explanation": "Static backend answer based on limited information; no model was consulted.",
    },
    "estimateTimeToHeartAttack": {
        "estimatedTimeWindow": "no immediate risk",
        "riskLevel": "low",
        "confidenceLevel": 0.1,
        "rationale": "Static backend answer based on limited information; no model was consulted.",
    },
}


class StaticGateway(StructuredInferenceGateway):
    """
    Deterministic backend. Queued answers are served first-in first-out per
    capability; an exception in the queue is raised instead of returned.
    Every request is recorded in ``calls``.
    """

    name = "static"

    def __init__(self, responses: Dict[str, List[Any]] = None):
        self.calls: List[InferenceRequest] = []
        self._queues: Dict[str, deque] = defaultdict(deque)
        for capability, answers in (responses or {}).items():
            self.queue(capability, *answers)

    def queue(self, capability: str, *answers: Any) -> None:
        self._queues[capability].extend(answers)

    async def _invoke(self, request: InferenceRequest) -> Any:
        self.calls.append(request)
        pending = self._queues[request.capability]
        answer = pending.popleft() if pending else CANNED_RESPONSES.get(request.capability)
        if isinstance(answer, BaseException):
            raise answer
        return answer

    def last_call(self, capability: str) -> InferenceRequest:
        for request in reversed(self.calls):
            if request.capability == capability:
                return request
        raise LookupError(f"No {capability} call recorded")
