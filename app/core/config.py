from typing import List, Optional

from pydantic import Field, SecretStr, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Internship Intake"
    VERSION: str = "1.0.0"

    # --- Environment & Debug ---
    ENVIRONMENT: str = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # --- Server ---
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # --- Cloudinary (upload adapter) ---
    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[SecretStr] = None
    UPLOAD_FOLDER: str = "internship-uploads"
    UPLOAD_FORMATS: List[str] = ["jpg", "png", "pdf"]
    ALLOWED_FILE_TYPES: List[str] = ["image/jpeg", "image/png", "application/pdf"]
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024  # 5MB

    # --- SendGrid (notification adapter) ---
    SENDGRID_API_KEY: Optional[SecretStr] = None
    VERIFIED_SENDER: Optional[str] = None
    ADMIN_EMAIL: Optional[str] = None
    NOTIFICATION_SUBJECT: str = "Internship Form Submission"

    # --- Persistence ---
    SUBMISSIONS_LOG_PATH: str = "submissions.txt"

    # --- CORS ---
    ALLOWED_ORIGINS: List[str] = Field(
        default_factory=lambda: ["*"],
        description="List of allowed CORS origins. Configure in .env",
    )

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def default_allowed_origins(
        cls, v: Optional[List[str]], info: ValidationInfo
    ) -> Optional[List[str]]:
        if v is None:
            return ["*"]
        if isinstance(v, str) and v.strip() in ("", "[]"):
            return ["*"]
        return v

    @field_validator("MAX_UPLOAD_BYTES")
    @classmethod
    def validate_max_upload_bytes(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("MAX_UPLOAD_BYTES must be a positive integer")
        return v


settings = Settings()


def get_settings() -> Settings:
    """Return the process-wide settings instance (overridable in tests)."""
    return settings
