"""Runtime configuration read from environment variables"""
import os
from typing import List, Optional


def app_env() -> str:
    """Deployment mode: 'development' exposes error details in responses"""
    return os.getenv("APP_ENV", "production").lower()


def is_development() -> bool:
    return app_env() == "development"


def db_path() -> str:
    return os.getenv("DB_PATH", "./data/taskboard.db")


def static_dir() -> Optional[str]:
    """Directory with the client's markup/script/styles, if any"""
    return os.getenv("STATIC_DIR") or None


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def cors_origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def host() -> str:
    return os.getenv("HOST", "0.0.0.0")


def port() -> int:
    return int(os.getenv("PORT", "3000"))
