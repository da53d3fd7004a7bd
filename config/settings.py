"""
Central configuration for ingestion limits and service credentials.

This module defines:
- Payload and prompt limits that bound memory and token usage per request.
- Heuristic thresholds used by the tabular extractor.
- Default AI gateway/model settings.
- ServiceSettings, the environment-backed credentials struct handed to the app
  factory and validated once at startup.
"""

from __future__ import annotations

from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from domain.errors import ConfigurationError

load_dotenv()


MAX_UPLOAD_BYTES = 500 * 1024
MULTIPART_OVERHEAD_BYTES = 64 * 1024

MAX_AI_TEXT_CHARS = 200_000

HEADER_SCAN_ROWS = 10
PROFILE_SAMPLE_ROWS = 100
FILL_RATE_THRESHOLD = 0.30
MAX_HEADER_LABEL_CHARS = 100

DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1"
DEFAULT_MODEL = "google/gemini-2.5-flash"
DEFAULT_TEMPERATURE = 0.1
DEFAULT_AI_TIMEOUT_SECONDS = 120.0

IMPORT_ROLES = ("admin", "staff")


class ServiceSettings(BaseSettings):
    """Credentials and endpoints read from the process environment (or .env)."""

    ai_api_key: Optional[str] = Field(default=None, alias="AI_GATEWAY_API_KEY")
    ai_base_url: str = Field(default=DEFAULT_GATEWAY_URL, alias="AI_GATEWAY_URL")
    ai_model: str = Field(default=DEFAULT_MODEL, alias="AI_MODEL")
    ai_timeout_seconds: float = Field(default=DEFAULT_AI_TIMEOUT_SECONDS, alias="AI_TIMEOUT_SECONDS")

    store_url: Optional[str] = Field(default=None, alias="SUPABASE_URL")
    store_service_key: Optional[str] = Field(default=None, alias="SUPABASE_SERVICE_ROLE_KEY")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    def missing(self) -> List[str]:
        """Return the environment names of required values that are not set."""
        required = {
            "AI_GATEWAY_API_KEY": self.ai_api_key,
            "SUPABASE_URL": self.store_url,
            "SUPABASE_SERVICE_ROLE_KEY": self.store_service_key,
        }
        return [name for name, value in required.items() if not (value or "").strip()]

    def ensure_complete(self) -> "ServiceSettings":
        missing = self.missing()
        if missing:
            raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")
        return self
