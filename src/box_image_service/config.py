"""
Configuration settings for the Box Image Classification Service.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Box Image Classification Service"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Model Shape ===
    IMAGE_SIZE: int = 150  # Pixels per side (square images)
    NUM_CHANNELS: int = 1  # Grayscale
    NUM_LABELS: int = 4

    # === Inference Backend (KServe v2 / Triton HTTP) ===
    BACKEND_URL: str = "http://triton:8000"
    MODEL_NAME: str = "box_image"
    MODEL_VERSION: Optional[str] = None  # None = server picks the version
    BACKEND_TIMEOUT: float = 30.0  # seconds
    BACKEND_MAX_CONNECTIONS: int = 100

    # === Signature ===
    SIGNATURE_KEY: str = "default"
    SIGNATURE_INPUT_TENSOR: Optional[str] = None  # Explicit names override auto-detection
    SIGNATURE_SCORES_TENSOR: Optional[str] = None

    # === Transport ===
    HTTP_HOST: str = "0.0.0.0"
    HTTP_PORT: int = 8000
    GRPC_ENABLED: bool = True
    GRPC_PORT: int = 9000
    GRPC_MAX_CONCURRENT_RPCS: Optional[int] = None
    GRPC_SHUTDOWN_GRACE: float = 5.0  # seconds

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
