# ringcam/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Ring API ──────────────────────────────────────────────────────────
    RING_API_BASE_URL: str = "https://api.ring.com/clients_api/"
    REQUEST_TIMEOUT_SECONDS: float = 20

    # ── Security ──────────────────────────────────────────────────────────
    API_KEY: Optional[str] = None   # Set in .env to enable auth on API endpoints

    # ── Dings ─────────────────────────────────────────────────────────────
    DING_EXPIRY_SECONDS: float = 65              # Dings last ~1 minute

    # ── Snapshots ─────────────────────────────────────────────────────────
    SNAPSHOT_GRACE_PERIOD_MS: int = 10000
    SLOW_SNAPSHOT_KINDS: list[str] = ["doorbell_v3"]   # Timestamp only refreshes every ~10 minutes

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
