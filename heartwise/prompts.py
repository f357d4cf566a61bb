"""Prompt templates for the two inference capabilities."""

PREDICT_RISK_CAPABILITY = "predictHeartAttackRisk"
ESTIMATE_TIME_CAPABILITY = "estimateTimeToHeartAttack"

PREDICT_RISK_PROMPT = """Given the following user data and heart rate information, predict the user's heart attack risk.

User Data: {user_data}

Heart Rate Data: BPM: {bpm}, Timestamp: {timestamp}

Consider heart rate variability when determining risk. Output the risk level (low, medium, or high), an estimated time window before a potential heart attack, and the reasoning behind the prediction.

Ensure that the estimatedTimeWindow is reasonable; if the risk is high, the time window should be shorter. If the risk is low, the time window can be longer. If there's not enough data, make a reasonable estimate and state that it's based on limited information.

Please output the riskLevel, estimatedTimeWindow, and explanation fields.
"""

ESTIMATE_TIME_PROMPT = (
    "Given the following heart rate data and user information, estimate the time window before a "
    "potential heart attack, the risk level (low, medium, high), a confidence level between 0 and 1, "
    "and the rationale behind the estimation. The heartRateBpm is {heart_rate_bpm}, the "
    "heartRateVariability is {heart_rate_variability}, and the userData is {user_data}. "
    "Return your answer as JSON."
)


def _or_unknown(value) -> str:
    return "not provided" if value is None or value == "" else str(value)


def render_predict_risk_prompt(user_data: str, bpm: float, timestamp: str) -> str:
    return PREDICT_RISK_PROMPT.format(user_data=_or_unknown(user_data), bpm=bpm, timestamp=timestamp)


def render_estimate_time_prompt(heart_rate_bpm: float, heart_rate_variability=None, user_data=None) -> str:
    return ESTIMATE_TIME_PROMPT.format(
        heart_rate_bpm=heart_rate_bpm,
        heart_rate_variability=_or_unknown(heart_rate_variability),
        user_data=_or_unknown(user_data),
    )
