import os

# Server configuration
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))
ENVIRONMENT = os.getenv("ENVIRONMENT", "production")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Client configuration
API_URL = os.getenv("EVENT_FINDER_API_URL", "http://localhost:5000/api")


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def seed_sample_events() -> bool:
    return _flag(os.getenv("SEED_SAMPLE_EVENTS", "true"))


def is_development() -> bool:
    return ENVIRONMENT.lower() == "development"


def get_api_url() -> str:
    return API_URL
