# toli/components/ai/__init__.py
"""
AI components for toli.

This package holds the response model, the model backends, and the
retry-and-repair loop that turns free-form model output into classified
command suggestions.
"""

from .models import (
    CommandOption, Command, ScriptRecommended, Uncertain, ResponseType, ResponseKind,
)
from .errors import (
    ToliError, TransportError, FormatError, UnsupportedOperationError,
    NotExecutableError, ConfigurationError,
)
from .classifier import classify, classify_all
from .parser import parse_command_options
from .repair import collect_options, translate_with_repair

__all__ = [
    'CommandOption', 'Command', 'ScriptRecommended', 'Uncertain', 'ResponseType', 'ResponseKind',
    'ToliError', 'TransportError', 'FormatError', 'UnsupportedOperationError',
    'NotExecutableError', 'ConfigurationError',
    'classify', 'classify_all', 'parse_command_options',
    'collect_options', 'translate_with_repair',
]
