"""
Application configuration and environment settings.
"""
import base64
import binascii
import json
from typing import List, Optional, Union

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings


def decode_service_key(value: str) -> dict:
    """Decode a base64-encoded Firebase service-account JSON document."""
    try:
        decoded = base64.b64decode(value, validate=True).decode("utf-8")
        service_account = json.loads(decoded)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValueError("FB_SERVICE_KEY is not base64-encoded JSON") from exc
    if not isinstance(service_account, dict):
        raise ValueError("FB_SERVICE_KEY must decode to a JSON object")
    return service_account


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Learnify"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_PREFIX: str = ""

    # Database (required, startup aborts without it)
    DATABASE_URL: str
    DB_ECHO: bool = False

    # Firebase (service key required, startup aborts without it)
    FB_SERVICE_KEY: str
    FIREBASE_PROJECT_ID: Optional[str] = None
    FIREBASE_JWKS_URL: str = (
        "https://www.googleapis.com/service_accounts/v1/jwk/"
        "securetoken@system.gserviceaccount.com"
    )

    # CORS
    CLIENT_URL: str = "https://learnify009.web.app"
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:5173", "http://localhost:5174"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("DATABASE_URL", "FB_SERVICE_KEY")
    @classmethod
    def require_non_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @model_validator(mode="after")
    def resolve_project_id(self):
        """Fill FIREBASE_PROJECT_ID from the service key when not set explicitly."""
        if not self.FIREBASE_PROJECT_ID:
            project_id = decode_service_key(self.FB_SERVICE_KEY).get("project_id")
            if not project_id:
                raise ValueError("FB_SERVICE_KEY has no project_id")
            self.FIREBASE_PROJECT_ID = project_id
        return self

    @property
    def allowed_origins(self) -> List[str]:
        """Client origin first, then the extra origins, without duplicates."""
        origins = [self.CLIENT_URL, *self.CORS_ORIGINS]
        return list(dict.fromkeys(o for o in origins if o))

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
