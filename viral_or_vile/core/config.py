"""
Centralized configuration management using Pydantic Settings.

Settings are loaded from environment variables and an optional .env file.
Nothing here is secret: the model server is reached on localhost and the
service itself has no credentials of its own.
"""

import json
import logging
from typing import Annotated, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables
    (e.g. OLLAMA_HOST, VISION_MODEL, MAX_UPLOAD_BYTES).
    """

    # API Configuration
    api_prefix: str = Field(
        default="/api",
        description="Prefix for all API routes (analyze lives at <prefix>/analyze)"
    )
    project_name: str = Field(
        default="VIRAL OR VILE",
        description="Project name displayed in API docs"
    )

    # Server
    host: str = Field(
        default="127.0.0.1",
        description="Interface uvicorn binds to when run as a module"
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port uvicorn listens on when run as a module"
    )

    # Model server (Ollama)
    ollama_host: str = Field(
        default="http://localhost:11434",
        description="Root URL of the Ollama server"
    )
    vision_model: str = Field(
        default="llava:latest",
        description="Multimodal model tag used for image analysis"
    )
    model_timeout_seconds: float = Field(
        default=120.0,
        gt=0,
        description="Timeout for the single model call per analysis"
    )

    # Uploads
    max_upload_bytes: int = Field(
        default=50 * 1024 * 1024,
        gt=0,
        description="Largest accepted image upload in bytes (50 MB)"
    )

    # CORS Configuration
    # NoDecode: the validator below handles both JSON and comma-separated values
    cors_origins: Annotated[List[str], NoDecode] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins (frontend URLs)"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_json: bool = Field(
        default=True,
        description="Emit JSON log lines (False for plain text during development)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def ollama_openai_base_url(self) -> str:
        """Ollama's OpenAI-compatible API root."""
        return f"{self.ollama_host}/v1"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | List[str]) -> List[str]:
        """
        Parse cors_origins from JSON string or list.

        Supports comma-separated origins for easier .env configuration.
        """
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("ollama_host")
    @classmethod
    def validate_ollama_host(cls, v: str) -> str:
        """
        Validate the Ollama host URL.

        Must be an http(s) URL; a trailing slash is dropped so paths can be
        appended directly.
        """
        v = v.strip()
        if not v:
            raise ValueError("OLLAMA_HOST is required and cannot be empty")
        if not (v.startswith("http://") or v.startswith("https://")):
            raise ValueError(
                f"OLLAMA_HOST must start with http:// or https://. Got: {v[:40]}"
            )
        return v.rstrip("/")

    @field_validator("vision_model")
    @classmethod
    def validate_vision_model(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("VISION_MODEL is required (e.g. llava:latest)")
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(
                f"LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL. Got: {v}"
            )
        return level


# Global settings instance
settings = Settings()
