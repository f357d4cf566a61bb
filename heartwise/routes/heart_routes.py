from fastapi import APIRouter, Depends

from heartwise.adapters.base_adapter import HeartRateSource
from heartwise.dependencies import get_gateway, get_heart_rate_source, http_error_for
from heartwise.errors import HeartWiseError
from heartwise.flows.estimate_time import estimate_time_to_heart_attack
from heartwise.flows.predict_risk import predict_heart_attack_risk
from heartwise.inference.base import StructuredInferenceGateway
from heartwise.logger import get_logger
from heartwise.utils.models import (
    EstimationRequest,
    HeartRateReading,
    PredictionRequest,
    RiskPrediction,
    TimeEstimate,
)

logger = get_logger(__name__)

router = APIRouter(tags=["Heart Risk"])


@router.get("/heart-rate", response_model=HeartRateReading)
def read_heart_rate(source: HeartRateSource = Depends(get_heart_rate_source)):
    """Returns the current reading from the heart-rate source."""
    try:
        return source.get_reading()
    except HeartWiseError as e:
        logger.error(f"Could not read heart rate. Error: {e}")
        raise http_error_for(e)


@router.post("/predict-risk", response_model=RiskPrediction)
async def predict_risk(
    body: PredictionRequest,
    source: HeartRateSource = Depends(get_heart_rate_source),
    gateway: StructuredInferenceGateway = Depends(get_gateway),
):
    """
    Predicts heart attack risk for the given user data, enriched with the
    current heart-rate reading. Does not touch the dashboard state.
    """
    try:
        return await predict_heart_attack_risk(body, source, gateway)
    except HeartWiseError as e:
        logger.error(f"Risk prediction failed. Error: {e}")
        raise http_error_for(e)


@router.post("/estimate-time", response_model=TimeEstimate)
async def estimate_time(
    body: EstimationRequest,
    source: HeartRateSource = Depends(get_heart_rate_source),
    gateway: StructuredInferenceGateway = Depends(get_gateway),
):
    """
    Estimates the time window before a potential heart attack. A missing
    heartRateBpm is filled from the heart-rate source.
    """
    try:
        return await estimate_time_to_heart_attack(body, source, gateway)
    except HeartWiseError as e:
        logger.error(f"Time estimation failed. Error: {e}")
        raise http_error_for(e)
