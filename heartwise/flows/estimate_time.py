"""Estimates the time window before a potential heart attack."""

from typing import Optional

from heartwise.adapters.base_adapter import HeartRateSource
from heartwise.inference.base import InferenceRequest, StructuredInferenceGateway
from heartwise.logger import get_logger
from heartwise.prompts import ESTIMATE_TIME_CAPABILITY, render_estimate_time_prompt
from heartwise.utils.models import EstimationPayload, EstimationRequest, TimeEstimate

logger = get_logger(__name__)


def resolve_bpm(explicit: Optional[float], source: HeartRateSource) -> float:
    """The caller's bpm when given, otherwise the source's current reading."""
    if explicit is not None:
        return explicit
    reading = source.get_reading()
    logger.info(f"No heart rate supplied, using source reading of {reading.bpm} bpm")
    return reading.bpm


def build_estimation_request(
    source: HeartRateSource,
    bpm: Optional[float] = None,
    variability: Optional[float] = None,
    profile: Optional[str] = None,
) -> EstimationPayload:
    return EstimationPayload(
        heart_rate_bpm=resolve_bpm(bpm, source),
        heart_rate_variability=variability,
        user_data=profile,
    )


async def estimate_time_to_heart_attack(
    request: EstimationRequest,
    source: HeartRateSource,
    gateway: StructuredInferenceGateway,
) -> TimeEstimate:
    payload = build_estimation_request(
        source,
        bpm=request.heart_rate_bpm,
        variability=request.heart_rate_variability,
        profile=request.user_data,
    )
    prompt = render_estimate_time_prompt(
        payload.heart_rate_bpm, payload.heart_rate_variability, payload.user_data
    )

    estimate = await gateway.generate(
        InferenceRequest(
            capability=ESTIMATE_TIME_CAPABILITY,
            payload=payload,
            prompt=prompt,
            output_model=TimeEstimate,
        )
    )
    logger.info(
        f"Estimated '{estimate.estimated_time_window}' ({estimate.risk_level}, "
        f"confidence {estimate.confidence_level}) at {payload.heart_rate_bpm} bpm"
    )
    return estimate
