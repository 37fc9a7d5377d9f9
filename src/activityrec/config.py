from datetime import timedelta

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = "sqlite+aiosqlite:///./data/activityrec.db"
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False
    jwt_secret: str = Field(..., min_length=1)  # Signing secret for bearer tokens, required
    jwt_expires_in: timedelta = timedelta(days=7)
    bcrypt_rounds: int = Field(12, ge=4, le=31)
    frontend_url: str = "http://localhost:5173"  # URL of the frontend application, used for CORS
    cors_origins: list[str] = []
    uploads_path: str = "uploads"  # Directory path for storing recording blobs
    public_path: str = "public"  # Directory path for static documents (instructions)
    max_upload_size: int = 100 * 1024 * 1024
    allowed_mime_types: list[str] = ["video/webm", "video/mp4", "audio/webm", "audio/wav"]

    model_config = {
        "env_file": [".env"],
        "env_prefix": "ACTIVITYREC_",
        "extra": "ignore",
    }

    @model_validator(mode="after")
    def default_cors_origins(self) -> "Config":
        if not self.cors_origins:
            self.cors_origins = [self.frontend_url]
        return self
