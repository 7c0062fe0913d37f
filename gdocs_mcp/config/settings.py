"""Centralized configuration management for the Google Docs MCP server.

This module provides a single source of truth for configuration including
environment variables, credential paths, backend timeouts and the pacing
used when filling tables.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic import model_validator
from pydantic_settings import BaseSettings

from ..exceptions import ConfigurationError

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    """Centralized settings for the Google Docs MCP server."""

    # === Google Credentials ===
    credentials_path: str = Field(
        default=str(PROJECT_ROOT / "credentials.json"), description="OAuth client secrets file"
    )
    token_path: str = Field(default=str(PROJECT_ROOT / "token.json"), description="Persisted OAuth token")

    # === Surfer SEO ===
    surfer_config_path: str = Field(
        default=str(PROJECT_ROOT / "surfer-config.json"), description="JSON file holding {'api_key': ...}"
    )
    surfer_api_key: str | None = Field(default=None, description="Surfer API key (overrides the config file)")
    surfer_base_url: str = Field(default="https://app.surferseo.com/api/v1", description="Surfer API root")

    # === Timeout Configuration ===
    http_timeout: float = Field(default=30.0, description="Timeout for keyword-service requests")

    # === Table Editing ===
    table_settle_delay: float = Field(
        default=0.5, description="Seconds to wait before re-reading a document after inserting a table"
    )
    fill_batch_size: int = Field(default=10, description="Maximum commands per table-fill batch")
    fill_batch_pause: float = Field(default=0.2, description="Seconds to pause between table-fill batches")

    # === Listing ===
    list_page_size: int = Field(default=50, description="Documents returned by the list resource")
    search_page_size: int = Field(default=10, description="Documents returned by a search")

    # === Test Environment Detection ===
    pytest_current_test: str | None = Field(default=None, description="Test mode indicator")

    # === HTTP SSE Server Configuration ===
    sse_host: str = Field(default="localhost", description="SSE server host")
    sse_port: int = Field(default=3001, description="SSE server port")

    # === Logging Configuration ===
    log_level: str = Field(default="INFO", description="Logging level")
    structured_logging: bool = Field(default=True, description="Enable structured JSON error logging")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def __init__(self, **kwargs):
        """Initialize settings with environment-specific adjustments."""
        super().__init__(**kwargs)
        self._adjust_for_test_environment()

    def _adjust_for_test_environment(self):
        """Drop pacing delays when running under pytest."""
        if self.is_test_environment:
            self.table_settle_delay = 0.0
            self.fill_batch_pause = 0.0

    @model_validator(mode="after")
    def validate_configuration(self):
        """Validate configuration consistency."""
        if self.fill_batch_size < 1:
            raise ValueError("fill_batch_size must be at least 1")
        if self.table_settle_delay < 0 or self.fill_batch_pause < 0:
            raise ValueError("delays must not be negative")
        return self

    @property
    def is_test_environment(self) -> bool:
        """Check if running in test environment."""
        return "PYTEST_CURRENT_TEST" in os.environ or self.pytest_current_test is not None

    @property
    def surfer_configured(self) -> bool:
        """Check if a Surfer API key is available without reading it."""
        return bool(self.surfer_api_key and self.surfer_api_key.strip()) or Path(self.surfer_config_path).is_file()

    def load_surfer_api_key(self) -> str:
        """Return the Surfer API key from the environment or the config file.

        Raises:
            ConfigurationError: If neither source provides a key
        """
        if self.surfer_api_key and self.surfer_api_key.strip():
            return self.surfer_api_key.strip()

        path = Path(self.surfer_config_path)
        if not path.is_file():
            raise ConfigurationError(
                "Surfer config file not found. Create surfer-config.json with your API key.",
                path=str(path),
            )
        try:
            config = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Could not read Surfer config: {e}", path=str(path)) from e

        api_key = config.get("api_key") if isinstance(config, dict) else None
        if not api_key:
            raise ConfigurationError("Surfer config has no 'api_key' entry", path=str(path))
        return api_key


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance (singleton pattern)."""
    global _settings
    if _settings is None:
        load_dotenv()  # Load .env file
        _settings = Settings()
    return _settings


def reset_settings():
    """Reset the global settings instance (primarily for testing)."""
    global _settings
    _settings = None
