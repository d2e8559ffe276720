# toli/components/ai/backends/__init__.py
"""
Model backends and the factory that picks one from configuration.
"""
from toli.config import AppConfig, BackendKind
from toli.components.ai.errors import ConfigurationError
from toli.utils.logging import get_logger

from .base import LLMBackend
from .ollama import OllamaBackend
from .openai import OpenAIBackend

logger = get_logger(__name__)

__all__ = ['LLMBackend', 'OllamaBackend', 'OpenAIBackend', 'create_backend']


def create_backend(config: AppConfig) -> LLMBackend:
    """Build the backend selected in ``config``."""
    if config.backend == BackendKind.OPENAI:
        if config.openai is None:
            raise ConfigurationError("OpenAI config missing")
        if not config.openai.api_key:
            raise ConfigurationError("OpenAI API key is not configured. Run 'toli init' or set OPENAI_API_KEY.")
        logger.debug(f"Using OpenAI backend with model {config.openai.model}")
        return OpenAIBackend(
            config.openai.api_key,
            model=config.openai.model,
            base_url=config.openai.base_url,
        )

    if config.ollama is None:
        raise ConfigurationError("Ollama config missing")
    logger.debug(f"Using Ollama backend at {config.ollama.endpoint} with model {config.ollama.model}")
    return OllamaBackend(config.ollama.endpoint, model=config.ollama.model)
