from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SystemSettings(BaseSettings):
    """
    Centralized system-level configuration.
    Reads from .env at startup. Immutable at runtime.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )

    # Local cache
    DATABASE_URL: str = Field("sqlite:///./medassist.db")

    # Remote sources (registry keys + endpoints)
    PRIMARY_SOURCE: str = Field("rest")
    PRIMARY_BASE_URL: str = Field("http://localhost:8080/")
    PRIMARY_API_KEY: Optional[str] = Field(None)
    SECONDARY_SOURCE: str = Field("firestore")
    SECONDARY_BASE_URL: str = Field(
        "https://firestore.googleapis.com/v1/projects/medassist/databases/(default)/documents/"
    )
    SECONDARY_API_KEY: Optional[str] = Field(None)

    # Per-request network timeouts (enforced by each source, not by the fetcher)
    CONNECT_TIMEOUT_SECONDS: float = Field(5.0)
    READ_TIMEOUT_SECONDS: float = Field(10.0)

    # Connectivity probe
    CONNECTIVITY_PROBE_URL: str = Field("https://clients3.google.com/generate_204")
    CONNECTIVITY_TIMEOUT_SECONDS: float = Field(3.0)

    # Background sync
    CELERY_BROKER_URL: str = Field("redis://localhost:6379/0")
    CELERY_RESULT_BACKEND: str = Field("redis://localhost:6379/1")
    AUTO_SYNC_INTERVAL_SECONDS: int = Field(900)

    # Demo REST backend
    SERVER_HOST: str = Field("0.0.0.0")
    SERVER_PORT: int = Field(8080)

    LOG_LEVEL: str = Field("INFO")


# Singleton instance
system_settings = SystemSettings()
