"""
Configuration settings for the review tracker.

This module handles environment variable loading and configuration management
using Pydantic for validation and type safety. An optional YAML file can
override the environment for the non-secret settings.
"""

import os
from functools import lru_cache
from typing import Any, Dict, List, Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import ConfigError
from ..models.records import VALID_STATES

DEFAULT_EXCLUDED_TYPES = [
    "Break",
    "Breakfast",
    "Ceremony",
    "Gold sponsor talk",
    "Hackathon",
    "Keynote",
    "Lunch Break",
    "Social hour",
]


class Settings(BaseSettings):
    """
    Review tracker configuration settings.

    All settings can be overridden via environment variables.
    """

    # pretalx API Configuration
    pretalx_token: Optional[str] = Field(
        default=None,
        description="pretalx API token sent with every request"
    )
    pretalx_base_url: str = Field(
        default="https://pretalx.com",
        description="Base URL of the pretalx instance"
    )
    event_name: str = Field(
        default="juliacon2023",
        description="Slug of the pretalx event to track"
    )
    request_timeout: int = Field(
        default=30,
        description="Timeout in seconds for API requests"
    )
    max_retries: int = Field(
        default=2,
        description="Retries for transport errors and 5xx responses"
    )

    # Coverage Configuration
    desired_reviews: int = Field(
        default=3,
        description="Number of reviews every proposal should receive"
    )
    track: str = Field(
        default="JuliaCon",
        description="Track whose proposals are included in the report"
    )
    default_track: str = Field(
        default="JuliaCon",
        description="Track label used for submissions without a track"
    )
    default_submission_type: str = Field(
        default="Talk",
        description="Type label used for submissions without a submission type"
    )
    valid_states: List[str] = Field(
        default_factory=lambda: list(VALID_STATES),
        description="Submission states kept in the catalog"
    )
    excluded_types: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_TYPES),
        description="Submission types that are not reviewed"
    )

    # Report Configuration
    output_html: str = Field(
        default="missing_reviews.html",
        description="Path of the generated HTML report"
    )
    poll_interval: int = Field(
        default=600,
        description="Seconds to wait between poll cycles"
    )
    render_partial: bool = Field(
        default=False,
        description="Render the report even when a page fetch failed"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="text",
        description="Logging format (json or text)"
    )
    debug_mode: bool = Field(
        default=True,
        description="Enable debug mode"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def require_token(self) -> str:
        """
        Return the configured API token.

        Raises:
            ConfigError: If no token is configured
        """
        token = (self.pretalx_token or "").strip()
        if not token:
            raise ConfigError(
                "Empty pretalx token, set PRETALX_TOKEN in the environment or .env file "
                "to your pretalx API token."
            )
        return token

    def validate_settings(self) -> List[str]:
        """
        Validate configuration and return a list of validation errors.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not (self.pretalx_token or "").strip():
            errors.append("Missing PRETALX_TOKEN in environment")
        if not self.event_name:
            errors.append("event_name must not be empty")
        if self.desired_reviews < 0:
            errors.append("desired_reviews must not be negative")
        if self.poll_interval <= 0:
            errors.append("poll_interval must be greater than 0")
        if self.request_timeout <= 0:
            errors.append("request_timeout must be greater than 0")
        if self.max_retries < 0:
            errors.append("max_retries must not be negative")
        if not self.valid_states:
            errors.append("No valid submission states configured")

        return errors


def load_settings(config_path: Optional[str] = None, **overrides: Any) -> Settings:
    """
    Load settings from the environment, overlaid with a YAML file.

    Args:
        config_path: Optional path to a YAML configuration file
        **overrides: Explicit values that take precedence over everything else

    Returns:
        Settings: Configured settings instance

    Raises:
        ConfigError: If the YAML file exists but is not a mapping
    """
    values: Dict[str, Any] = {}

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as file:
            yaml_config = yaml.safe_load(file)
        if yaml_config is not None and not isinstance(yaml_config, dict):
            raise ConfigError(f"Configuration file {config_path} must contain a mapping")
        values.update(yaml_config or {})

    values.update({key: value for key, value in overrides.items() if value is not None})
    return Settings(**values)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Configured settings instance
    """
    return Settings()
