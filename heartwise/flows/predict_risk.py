"""
Predicts heart attack risk from the user's profile and the current heart rate.

The risk policy (shorter windows for higher risk, flagging thin data) lives in
the prompt; nothing here checks that the model honoured it.
"""

from heartwise.adapters.base_adapter import HeartRateSource
from heartwise.inference.base import InferenceRequest, StructuredInferenceGateway
from heartwise.logger import get_logger
from heartwise.prompts import PREDICT_RISK_CAPABILITY, render_predict_risk_prompt
from heartwise.utils.models import PredictionPayload, PredictionRequest, RiskPrediction

logger = get_logger(__name__)


def build_prediction_request(profile: str, source: HeartRateSource) -> PredictionPayload:
    reading = source.get_reading()
    return PredictionPayload(user_data=profile, heart_rate_data=reading)


async def predict_heart_attack_risk(
    request: PredictionRequest,
    source: HeartRateSource,
    gateway: StructuredInferenceGateway,
) -> RiskPrediction:
    payload = build_prediction_request(request.user_data, source)
    reading = payload.heart_rate_data
    prompt = render_predict_risk_prompt(payload.user_data, reading.bpm, reading.timestamp.isoformat())

    prediction = await gateway.generate(
        InferenceRequest(
            capability=PREDICT_RISK_CAPABILITY,
            payload=payload,
            prompt=prompt,
            output_model=RiskPrediction,
        )
    )
    logger.info(f"Predicted risk level '{prediction.risk_level}' at {reading.bpm} bpm")
    return prediction
