import os
from dotenv import load_dotenv

load_dotenv()

SERVICE_HOST = os.getenv("SERVICE_HOST", "0.0.0.0")
SERVICE_PORT = int(os.getenv("SERVICE_PORT", os.getenv("PORT", 3001)))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def get_cors_origins() -> list[str]:
    """Allowed CORS origins from the comma-separated CORS_ORIGINS variable."""
    raw = os.getenv("CORS_ORIGINS", "*")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]
