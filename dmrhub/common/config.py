"""Environment & configuration loader (single source of truth)."""
import os
from dataclasses import dataclass
from dotenv import load_dotenv

from .constants import APP_NAME, DEFAULT_LINE_FORMAT, LOCAL_LOG_DIR, QUEUE_CAPACITY, SYSTEM_LOG_DIR

load_dotenv(override=True)

@dataclass(frozen=True)
class Settings:
    # Identity / file naming: <APP_NAME>.<category>.log
    APP_NAME: str = os.getenv("APP_NAME", APP_NAME)

    # Destinations
    LOG_DIR: str = os.getenv("LOG_DIR", SYSTEM_LOG_DIR)  # preferred, server platforms only
    LOCAL_LOG_DIR: str = os.getenv("LOCAL_LOG_DIR", LOCAL_LOG_DIR)  # fallback

    # Relay queue
    LOG_QUEUE_CAPACITY: int = int(os.getenv("LOG_QUEUE_CAPACITY", str(QUEUE_CAPACITY)))
    LOG_OVERFLOW_POLICY: str = os.getenv("LOG_OVERFLOW_POLICY", "block").lower()  # block|drop_newest|drop_oldest|reject

    # Line layout (loguru format string)
    LOG_LINE_FORMAT: str = os.getenv("LOG_LINE_FORMAT", DEFAULT_LINE_FORMAT)

    # Caller tags are shown relative to this prefix
    CALLER_PREFIX: str = os.getenv("CALLER_PREFIX", "dmrhub.")

    # Internal diagnostics (fallback notices, relay lifecycle)
    DIAG_LOG_LEVEL: str = os.getenv("DIAG_LOG_LEVEL", "WARNING").upper()
    DIAG_LOG_FILE: str = os.getenv("DIAG_LOG_FILE", "")  # blank disables the file sink

    # HTTP
    ACCESS_LOG_ENABLE: bool = os.getenv("ACCESS_LOG_ENABLE", "true").lower() in ("1", "true", "yes")

SETTINGS = Settings()
