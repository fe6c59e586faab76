# contactscout/config.py
from pydantic_settings import BaseSettings
from typing import Literal, Optional
import os

from . import __version__


class Settings(BaseSettings):
    APP_NAME: str = "contactscout"

    HOST: str = os.environ.get("HOST", "0.0.0.0")
    PORT: int = int(os.environ.get("PORT", 8000))

    # scraping
    FETCH_DELAY_SECONDS: float = float(os.environ.get("FETCH_DELAY_SECONDS", 1.0))
    # unset -> no timeout on outgoing requests
    FETCH_TIMEOUT_SECONDS: Optional[float] = None
    USER_AGENT: str = os.environ.get("USER_AGENT", f"contactscout/{__version__}")

    # job retention
    JOB_RETENTION_SECONDS: float = float(os.environ.get("JOB_RETENTION_SECONDS", 5 * 60))
    # "completion": evict N seconds after the job finishes
    # "last_read": every status read of a finished job pushes eviction out again
    EVICTION_MODE: Literal["completion", "last_read"] = os.environ.get("EVICTION_MODE", "completion")

    # frontend assets (index.html, style.css, script.js)
    STATIC_DIR: str = os.environ.get("STATIC_DIR", ".")

    # other useful defaults
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    DEBUG: bool = os.environ.get("DEBUG", "False").lower() in ("1", "true", "yes")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
