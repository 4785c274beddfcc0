# emissions/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Database ──────────────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite:///./emissions.db"

    # ── Network ───────────────────────────────────────────────────────────
    BACKEND_IP: str = "0.0.0.0"
    BACKEND_PORT: int = 8080
    PUBLIC_BASE_URL: str = "http://localhost:8080/api/v1"   # QR links point at <this>/verify/<number>

    # ── Certificates ──────────────────────────────────────────────────────
    STATION_NAME: str = "Vehicle Emissions Testing Station"
    CERTIFICATE_PREFIX: str = "NIG"
    CERTIFICATE_NUMBER_MAX_ATTEMPTS: int = 5     # Regenerate on collision, then give up

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = True                     # Off in tests and read-only containers
    LOG_FILE_MAX_BYTES: int = 5 * 1024 * 1024
    LOG_FILE_BACKUPS: int = 10

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
