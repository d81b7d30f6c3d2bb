"""Central configuration for the site actions backend.

A typed Settings object (Pydantic BaseSettings) is used for dependency
injection in the API and handlers. Fixed user-facing messages live here as
module-level constants.
"""

from dotenv import load_dotenv, find_dotenv
import os
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables once for the whole app
load_dotenv(find_dotenv())

# Normalise OPENAI_BASE_URL so downstream clients don't see an invalid URL


def _sanitize_openai_base() -> None:
    base = os.getenv("OPENAI_BASE_URL", "").strip()
    api_base = os.getenv("OPENAI_API_BASE", "").strip()
    use = base or api_base
    if not use:
        # Remove empty vars to let SDK default to https://api.openai.com/v1
        os.environ.pop("OPENAI_BASE_URL", None)
        os.environ.pop("OPENAI_API_BASE", None)
        return
    if not (use.startswith("http://") or use.startswith("https://")):
        use = "https://" + use
    os.environ["OPENAI_BASE_URL"] = use
    os.environ["OPENAI_API_BASE"] = use


_sanitize_openai_base()


class Settings(BaseSettings):
    """Runtime settings for the API and handlers.

    Values are loaded from environment variables and optional .env files.
    """

    APP_NAME: str = "Portfolio Actions API"
    APP_VERSION: str = "1.0.0"
    ENV: str = "dev"

    # AI flows
    LLM_MODEL: str = "gpt-4o-mini"
    LLM_TEMPERATURE: float = 0.3
    LLM_MAX_TOKENS: int = 800

    # Contact form
    CONTACT_SUBMIT_DELAY_SECONDS: float = 1.0

    # CORS (wide-open by default; tighten in prod)
    CORS_ORIGINS: List[str] = ["*"]

    # Server (run_api.py)
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    RELOAD: bool = False

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# Contact form copy
CONTACT_VALIDATION_FAILED = "Validation failed. Please check your input."
CONTACT_THANK_YOU = "Thank you for your message! I'll get back to you soon."
NAME_MIN_LENGTH = 2
MESSAGE_MIN_LENGTH = 10
FIELD_MESSAGES = {
    "name": f"Name must be at least {NAME_MIN_LENGTH} characters.",
    "email": "Invalid email address.",
    "message": f"Message must be at least {MESSAGE_MIN_LENGTH} characters.",
}

# Generic client-facing errors; upstream detail is only ever logged
ASK_AI_ERROR = "Sorry, I couldn't process your question right now. Please try again later."
CHAT_ERROR = "Sorry, I couldn't process your message right now. Please try again later."
