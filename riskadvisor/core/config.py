"""
Risk Advisor: Configuration Management

This module provides centralised configuration management for the Risk
Advisor engine. It loads configuration from environment variables
(optionally via a .env file), with strongly typed access via Pydantic
BaseSettings.

Key responsibilities:
- Load and validate configuration from environment variables
- Provide typed configuration objects for logging and narrative calls
- Expose a cached global configuration accessor for convenience

External dependencies:
- pydantic: Data validation and settings management
- pydantic-settings: Environment variable integration for settings
- python-dotenv: Optional .env loading for local development

Thread safety: Thread-safe (configuration is immutable after initial load)

Author: Risk Advisor Team
Created: 2025-12-02
Last Modified: 2025-12-09
Status: Development
Version: v0.1.0
"""

# ============================================================================
# Imports
# ============================================================================

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# ============================================================================
# Data Models
# ============================================================================


class LoggingConfig(BaseModel):
    """Logging configuration for the Risk Advisor.

    Attributes:
        level: Log level name (e.g. "INFO", "DEBUG").
        file: Path to the primary log file.
    """

    level: str = "INFO"
    file: str = "riskadvisor.log"


class NarrativeConfig(BaseModel):
    """Settings applied to every Narrative Provider call.

    Attributes:
        timeout_seconds: Upper bound on a single explanation request.
            Requests exceeding it are abandoned and replaced with the
            call site's fallback text.
        language: Language code passed to the provider.
    """

    timeout_seconds: float = 5.0
    language: str = "en"


class RiskAdvisorConfig(BaseSettings):
    """Main Risk Advisor configuration loaded from environment variables.

    Environment variables use the following mapping by default:

    - LOG_LEVEL / LOG_FILE for logging
    - ENVIRONMENT for environment name (development/staging/production)
    - NARRATIVE_TIMEOUT_SECONDS / NARRATIVE_LANGUAGE for narrative calls

    Environment variables take precedence over any other configuration
    source.
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: str = Field(default="riskadvisor.log", alias="LOG_FILE")

    # Environment
    environment: str = Field(default="development", alias="ENVIRONMENT")

    # Narrative provider
    narrative_timeout_seconds: float = Field(
        default=5.0, alias="NARRATIVE_TIMEOUT_SECONDS"
    )
    narrative_language: str = Field(default="en", alias="NARRATIVE_LANGUAGE")

    @field_validator("narrative_timeout_seconds")
    @classmethod
    def _timeout_must_be_positive(cls, value: float) -> float:
        if value <= 0.0:
            raise ValueError("NARRATIVE_TIMEOUT_SECONDS must be positive")
        return value

    @property
    def logging(self) -> LoggingConfig:
        """Return logging configuration."""

        return LoggingConfig(level=self.log_level, file=self.log_file)

    @property
    def narrative(self) -> NarrativeConfig:
        """Return narrative provider configuration.

        Environment variables:
        - NARRATIVE_TIMEOUT_SECONDS
        - NARRATIVE_LANGUAGE
        """

        return NarrativeConfig(
            timeout_seconds=self.narrative_timeout_seconds,
            language=self.narrative_language,
        )


# ============================================================================
# Public API
# ============================================================================


def load_config(env_file: Optional[Path] = None) -> RiskAdvisorConfig:
    """Load Risk Advisor configuration.

    For local development this function will attempt to load a `.env` file
    from the current working directory if one is present. Environment
    variables always take precedence over values from `.env`.

    Args:
        env_file: Optional explicit path to a `.env` file. If omitted,
            the function will look for `.env` in the current working
            directory.

    Returns:
        A fully populated :class:`RiskAdvisorConfig` instance.

    Raises:
        FileNotFoundError: If an explicit ``env_file`` is provided but
            does not exist.
    """

    if env_file is not None:
        if not env_file.exists():
            msg = f"Environment file not found: {env_file}"
            raise FileNotFoundError(msg)
        # An explicit env_file overrides existing values so that tests and
        # local runs can reliably control configuration.
        load_dotenv(env_file, override=True)
    else:
        default_env = Path(".env")
        if default_env.exists():
            load_dotenv(default_env)

    return RiskAdvisorConfig()  # type: ignore[call-arg]


_global_config: Optional[RiskAdvisorConfig] = None


def get_config() -> RiskAdvisorConfig:
    """Return the global Risk Advisor configuration singleton.

    The configuration is loaded on first access (lazy loading) and cached
    for subsequent calls.

    Returns:
        A cached :class:`RiskAdvisorConfig` instance.
    """

    global _global_config
    if _global_config is None:
        _global_config = load_config()
    return _global_config
