import pytest

from heartwise.errors import SourceUnavailable
from heartwise.flows.estimate_time import build_estimation_request, estimate_time_to_heart_attack, resolve_bpm
from heartwise.flows.predict_risk import build_prediction_request, predict_heart_attack_risk
from heartwise.prompts import ESTIMATE_TIME_CAPABILITY, PREDICT_RISK_CAPABILITY
from heartwise.utils.models import EstimationRequest, PredictionRequest, RiskPrediction, TimeEstimate

# --- 1. Prediction request building ---

def test_prediction_request_carries_source_reading(elevated_source):
    payload = build_prediction_request("Age: 70, smoker", elevated_source)
    assert payload.user_data == "Age: 70, smoker"
    assert payload.heart_rate_data == elevated_source.reading
    assert elevated_source.reads == 1


async def test_predict_risk_sends_enriched_payload(elevated_source, static_gateway, high_risk_prediction):
    static_gateway.queue(PREDICT_RISK_CAPABILITY, high_risk_prediction)

    prediction = await predict_heart_attack_risk(
        PredictionRequest(user_data="Age: 70, smoker, prior cardiac event"), elevated_source, static_gateway
    )

    assert isinstance(prediction, RiskPrediction)
    assert prediction.risk_level == "high"
    assert prediction.estimated_time_window == "within 24 hours"

    call = static_gateway.last_call(PREDICT_RISK_CAPABILITY)
    assert call.output_model is RiskPrediction
    assert call.payload.heart_rate_data.bpm == 130
    assert "BPM: 130" in call.prompt
    assert "Age: 70, smoker, prior cardiac event" in call.prompt
    assert "2025-08-14T10:00:00+00:00" in call.prompt


async def test_predict_risk_source_unavailable_skips_gateway(failing_source, static_gateway):
    with pytest.raises(SourceUnavailable):
        await predict_heart_attack_risk(PredictionRequest(user_data="x"), failing_source, static_gateway)
    assert static_gateway.calls == []

# --- 2. Fallback-then-override for bpm ---

def test_resolve_bpm_prefers_explicit_value(elevated_source):
    assert resolve_bpm(65, elevated_source) == 65
    assert elevated_source.reads == 0


def test_resolve_bpm_falls_back_to_source(elevated_source):
    assert resolve_bpm(None, elevated_source) == 130
    assert elevated_source.reads == 1


def test_build_estimation_request_keeps_optional_fields(elevated_source):
    payload = build_estimation_request(elevated_source, variability=42.5, profile="Age: 50")
    assert payload.heart_rate_bpm == 130
    assert payload.heart_rate_variability == 42.5
    assert payload.user_data == "Age: 50"


@pytest.mark.parametrize("explicit_bpm", [48, 65, 180.5])
async def test_explicit_bpm_reaches_gateway(explicit_bpm, elevated_source, static_gateway, low_risk_estimate):
    static_gateway.queue(ESTIMATE_TIME_CAPABILITY, low_risk_estimate)

    await estimate_time_to_heart_attack(
        EstimationRequest(heart_rate_bpm=explicit_bpm), elevated_source, static_gateway
    )

    call = static_gateway.last_call(ESTIMATE_TIME_CAPABILITY)
    assert call.payload.heart_rate_bpm == explicit_bpm
    assert f"heartRateBpm is {explicit_bpm}" in call.prompt


async def test_omitted_bpm_uses_source_reading(elevated_source, static_gateway, low_risk_estimate):
    static_gateway.queue(ESTIMATE_TIME_CAPABILITY, low_risk_estimate)

    await estimate_time_to_heart_attack(EstimationRequest(), elevated_source, static_gateway)

    call = static_gateway.last_call(ESTIMATE_TIME_CAPABILITY)
    assert call.payload.heart_rate_bpm == elevated_source.reading.bpm


async def test_estimate_without_profile(stub_source, static_gateway, low_risk_estimate):
    static_gateway.queue(ESTIMATE_TIME_CAPABILITY, low_risk_estimate)

    estimate = await estimate_time_to_heart_attack(
        EstimationRequest(heart_rate_bpm=65), stub_source, static_gateway
    )

    assert isinstance(estimate, TimeEstimate)
    assert estimate.risk_level == "low"
    assert estimate.confidence_level == 0.4
    assert estimate.rationale == "limited data"
    call = static_gateway.last_call(ESTIMATE_TIME_CAPABILITY)
    assert call.payload.user_data is None
    assert "userData is not provided" in call.prompt
