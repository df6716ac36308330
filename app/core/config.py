"""Configuration settings for the makeup analysis service."""
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    These settings are loaded from environment variables with the following precedence:
    1. Environment variables
    2. .env file
    3. Default values

    Attributes:
        MAX_UPLOAD_BYTES: Largest accepted upload, in bytes
        ML_DETECTOR_ENABLED: Whether to try the insightface detector at all
        DETECTOR_INIT_TIMEOUT: Seconds to wait for the ML detector before going heuristic-only
        GOOGLE_API_KEY: Credential for the Imagen engine (empty disables it)
        OPENAI_API_KEY: Credential for the DALL-E engine (empty disables it)
    """
    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="",
        env_nested_delimiter="__"
    )

    # Core Settings
    PROJECT_NAME: str = "MakeupAI Analysis Service"
    VERSION: str = "0.1.0"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"

    # CORS Settings
    ALLOWED_ORIGINS: str = "http://localhost:3000"

    @property
    def cors_origins(self) -> List[str]:
        """Get list of allowed origins."""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    # Upload Settings
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024  # 5MB
    ALLOWED_MIME_TYPES: str = "image/jpeg,image/jpg,image/png,image/webp"
    MAX_IMAGE_WIDTH: int = 1024
    MAX_IMAGE_HEIGHT: int = 1024
    IMAGE_QUALITY: float = 0.8

    @property
    def allowed_mime_types(self) -> List[str]:
        """Get list of accepted upload MIME types."""
        return [mime.strip().lower() for mime in self.ALLOWED_MIME_TYPES.split(",") if mime.strip()]

    # Face Detection Settings
    ML_DETECTOR_ENABLED: bool = True
    MODEL_PATH: str = "buffalo_l"
    MODEL_CACHE_DIR: str = ".model_cache"
    DETECTOR_INIT_TIMEOUT: float = 10.0
    MIN_DETECTION_CONFIDENCE: float = 0.5
    HEURISTIC_SAMPLE_STRIDE: int = 4

    # Recommendation Settings
    DEFAULT_REGION: str = "japan"

    # Image Generation Settings
    GOOGLE_API_KEY: Optional[str] = None
    GOOGLE_API_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GOOGLE_IMAGEN_MODEL: str = "imagen-3.0-generate-001"
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_API_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_IMAGE_MODEL: str = "dall-e-3"
    GENERATION_HTTP_TIMEOUT: float = 60.0

    # Optional settings with defaults
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8000

settings = Settings()
