from typing import List, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    Manages all application settings. It automatically reads from
    environment variables or a .env file.
    """
    # Tell pydantic to load variables from a .env file
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Only needed once the OpenAI backend actually serves a request
    OPENAI_API_KEY: Optional[str] = None
    LLM_MODEL: str = "gpt-4o-mini"
    LLM_TEMPERATURE: float = 0.0
    LLM_TIMEOUT_SECONDS: float = 30.0

    # "openai" talks to the model, "static" returns canned answers for offline demos
    INFERENCE_BACKEND: Literal["openai", "static"] = "openai"

    HEART_RATE_STUB_BPM: float = 72.0
    DEFAULT_USER_DATA: str = "Age: 30, Gender: Male, Medical History: None"

    CORS_ALLOW_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

# Create a single, reusable instance of the settings
settings = Settings()
