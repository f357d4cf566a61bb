import argparse
import json
import requests

from heartwise.logger import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:8000"


def _post(url: str, **kwargs) -> dict:
    response = requests.post(url, **kwargs)
    response.raise_for_status()
    return response.json()


def _log_notifications(base_url: str) -> list:
    """Fetches the notices the server emitted and logs each one."""
    try:
        response = requests.get(f"{base_url}/dashboard/notifications")
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        logger.error(f"!! Could not fetch notifications: {e}")
        return []

    notices = response.json().get("notifications", [])
    for notice in notices:
        logger.info(f"-> Notification [{notice['variant']}] {notice['title']}: {notice['description']}")
    return notices


def run_scenario(base_url: str, user_data: str, action: str, heart_rate_variability: float = None):
    """
    Drives a running server through one dashboard action: store the
    profile, run the action, print the state and any notifications.
    """
    try:
        requests.put(f"{base_url}/dashboard/user-data", json={"userData": user_data}).raise_for_status()
        logger.info(f"Stored user data: {user_data}")

        if action == "predict":
            state = _post(f"{base_url}/dashboard/predict")
        else:
            params = {}
            if heart_rate_variability is not None:
                params["heart_rate_variability"] = heart_rate_variability
            state = _post(f"{base_url}/dashboard/estimate", params=params)
        logger.info(f"-> Dashboard state: {json.dumps(state, indent=2)}")

    # If the response is not successful, log the error
    except requests.exceptions.RequestException as e:
        logger.error(f"!! {action} failed: {e}")
        # The server still emits an error notice for a failed action
        _log_notifications(base_url)
        return None

    _log_notifications(base_url)

    if state.get("alertVisible"):
        # Mirror the watch face: acknowledge the alert once it has been shown
        requests.post(f"{base_url}/dashboard/alert/dismiss").raise_for_status()
        logger.info("Emergency alert dismissed.")
    return state


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run a risk prediction or time estimation against the HeartWise API.")
    parser.add_argument("action", choices=["predict", "estimate"], help="Which dashboard action to run.")
    parser.add_argument("--user-data", default="Age: 30, Gender: Male, Medical History: None", help="Free-text user profile.")
    parser.add_argument("--hrv", type=float, default=None, help="Optional heart rate variability for estimates.")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="Where the API is served.")

    args = parser.parse_args()
    run_scenario(args.base_url, args.user_data, args.action, args.hrv)
