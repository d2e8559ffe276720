# toli/utils/enhanced_logging.py
import logging
from typing import Dict, Any, Optional


class EnhancedLogger:
    """Logger wrapper that appends bound context to every message."""
    
    def __init__(self, name: str):
        self._logger = logging.getLogger(name)
        self._context: Dict[str, Any] = {}
    
    def with_context(self, **context) -> 'EnhancedLogger':
        """Create a new logger with added context."""
        new_logger = EnhancedLogger(self._logger.name)
        new_logger._context = {**self._context, **context}
        return new_logger
    
    def _format_message(self, msg: str, extra: Optional[Dict[str, Any]] = None) -> str:
        context = {**self._context}
        if extra:
            context.update(extra)
        if not context:
            return msg
        pairs = " ".join(f"{key}={value!r}" for key, value in context.items())
        return f"{msg} [{pairs}]"
    
    def debug(self, msg: str, *args, **kwargs) -> None:
        extra = kwargs.pop("extra", {})
        self._logger.debug(self._format_message(msg, extra), *args, **kwargs)
    
    def info(self, msg: str, *args, **kwargs) -> None:
        extra = kwargs.pop("extra", {})
        self._logger.info(self._format_message(msg, extra), *args, **kwargs)
    
    def warning(self, msg: str, *args, **kwargs) -> None:
        extra = kwargs.pop("extra", {})
        self._logger.warning(self._format_message(msg, extra), *args, **kwargs)
    
    def error(self, msg: str, *args, **kwargs) -> None:
        extra = kwargs.pop("extra", {})
        self._logger.error(self._format_message(msg, extra), *args, **kwargs)
    
    def exception(self, msg: str, *args, **kwargs) -> None:
        """Log an exception with context and traceback."""
        extra = kwargs.pop("extra", {})
        self._logger.exception(self._format_message(msg, extra), *args, **kwargs)

    @property
    def name(self) -> str:
        return self._logger.name
    
