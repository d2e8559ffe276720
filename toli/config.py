# toli/config.py
"""
Configuration management for toli.
Uses TOML format for configuration files.
"""
import os
import tomllib
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import tomli_w
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from toli.constants import (
    CONFIG_FILE,
    DEFAULT_ADDITIONAL_CONTEXT,
    OLLAMA_CONFIG_MODEL,
    OLLAMA_DEFAULT_ENDPOINT,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
)
from toli.utils.logging import get_logger

logger = get_logger(__name__)


# --- Configuration Models ---

class BackendKind(str, Enum):
    """Model-serving providers toli can talk to."""
    OPENAI = "openai"
    OLLAMA = "ollama"


class OpenAIConfig(BaseModel):
    """Hosted OpenAI-compatible API settings."""
    api_key: Optional[str] = Field(None, description="API key sent as a bearer token")
    model: str = Field(OPENAI_DEFAULT_MODEL, description="Chat completion model")
    base_url: str = Field(OPENAI_DEFAULT_BASE_URL, description="API base URL")


class OllamaConfig(BaseModel):
    """Local Ollama endpoint settings."""
    endpoint: str = Field(OLLAMA_DEFAULT_ENDPOINT, description="Ollama server URL")
    model: str = Field(OLLAMA_CONFIG_MODEL, description="Model tag to generate with")


class AppConfig(BaseModel):
    """Application configuration settings."""
    backend: BackendKind = Field(BackendKind.OLLAMA, description="Backend used for queries")
    openai: Optional[OpenAIConfig] = Field(None, description="OpenAI backend configuration")
    ollama: Optional[OllamaConfig] = Field(None, description="Ollama backend configuration")
    additional_context: str = Field(
        DEFAULT_ADDITIONAL_CONTEXT,
        description="Free-text description of the user's environment, added to every prompt",
    )
    debug: bool = Field(False, description="Enable debug mode")

    @field_validator("backend", mode="before")
    @classmethod
    def _normalize_backend(cls, value: Any) -> Any:
        # Older config files spell the backend "OpenAI" / "Ollama"
        if isinstance(value, str):
            return value.strip().lower()
        return value


def default_config() -> AppConfig:
    """Configuration written on first run: both backends filled in."""
    return AppConfig(
        backend=BackendKind.OLLAMA,
        openai=OpenAIConfig(api_key="your-openai-api-key-here"),
        ollama=OllamaConfig(),
    )


# --- Configuration Manager ---

class ConfigManager:
    """Manages the configuration for toli using TOML."""

    def __init__(self, config_file: Path = CONFIG_FILE):
        self.config_file = Path(config_file)
        self._config: AppConfig = default_config()

    def _apply_environment(self) -> None:
        """Overrides from environment variables and a .env file."""
        load_dotenv()

        api_key = os.getenv("OPENAI_API_KEY")
        if api_key:
            if self._config.openai is None:
                self._config.openai = OpenAIConfig()
            self._config.openai.api_key = api_key

        backend = os.getenv("TOLI_BACKEND")
        if backend:
            try:
                self._config.backend = BackendKind(backend.strip().lower())
            except ValueError:
                logger.warning(f"Ignoring unknown TOLI_BACKEND value: {backend}")

        endpoint = os.getenv("TOLI_OLLAMA_ENDPOINT")
        if endpoint:
            if self._config.ollama is None:
                self._config.ollama = OllamaConfig()
            self._config.ollama.endpoint = endpoint

    def load_config(self) -> AppConfig:
        """Loads configuration from the TOML config file, creating it if missing."""
        if not self.config_file.exists():
            logger.debug(f"Configuration file not found at '{self.config_file}'. Saving default configuration.")
            self._config = default_config()
            self.save_config()
            self._apply_environment()
            return self._config

        try:
            logger.debug(f"Loading configuration from: {self.config_file}")
            with open(self.config_file, "rb") as f:
                config_data = tomllib.load(f)
            self._config = AppConfig.model_validate(config_data)

        except tomllib.TOMLDecodeError as e:
            logger.error(f"Error decoding TOML configuration file ({self.config_file}): {e}")
            logger.error("Using default configuration and environment variables.")
            self._config = default_config()
        except ValidationError as e:
            logger.error(f"Invalid values in configuration file ({self.config_file}): {e}")
            logger.error("Using default configuration and environment variables.")
            self._config = default_config()
        except OSError as e:
            logger.error(f"Could not read configuration file ({self.config_file}): {e}")
            logger.error("Using default configuration and environment variables.")
            self._config = default_config()

        self._apply_environment()
        return self._config

    def save_config(self) -> None:
        """Saves the current configuration to the config file (as TOML)."""
        config_dict: Dict[str, Any] = self._config.model_dump(mode="json", exclude_none=True)
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "wb") as f:
                tomli_w.dump(config_dict, f)
            logger.info(f"Configuration saved to {self.config_file}")
        except OSError as e:
            logger.error(f"Error saving TOML configuration to {self.config_file}: {e}")

    def update(self, config: AppConfig) -> None:
        self._config = config

    @property
    def config(self) -> AppConfig:
        """Provides access to the current application configuration."""
        return self._config


# --- Global Instance ---

config_manager = ConfigManager()
