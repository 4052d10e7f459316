import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings and configuration."""
    # "memory" keeps everything in process, "firebase" uses the Realtime Database
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory").lower()

    FIREBASE_SERVICE_ACCOUNT_KEY_JSON = os.getenv("FIREBASE_SERVICE_ACCOUNT_KEY_JSON")
    FIREBASE_DATABASE_URL = os.getenv("FIREBASE_DATABASE_URL")

    # Used for the AI weather waypoint suggestions
    TOGETHER_API_KEY = os.getenv("TOGETHER_API_KEY")
    TOGETHER_MODEL = os.getenv("TOGETHER_MODEL", "meta-llama/Llama-3.3-70B-Instruct-Turbo")

    # Seeds the demo trips and a small gear library into an empty store
    SEED_DEMO_DATA = _env_flag("SEED_DEMO_DATA")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv(
            "CORS_ORIGINS",
            "http://localhost,http://localhost:3000,http://127.0.0.1:3000,http://localhost:8000",
        ).split(",")
        if origin.strip()
    ]


settings = Settings()
