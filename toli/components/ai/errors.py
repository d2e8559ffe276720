# toli/components/ai/errors.py
"""
Error types raised by backends and the execution boundary.
"""
from typing import Optional


class ToliError(Exception):
    """Base class for every error toli raises on purpose."""


class TransportError(ToliError):
    """The model could not be reached, or answered with a non-success status."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class FormatError(ToliError):
    """The model was reached but its response was unusable."""

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw


class UnsupportedOperationError(ToliError):
    """The selected backend cannot perform the requested operation."""


class NotExecutableError(ToliError):
    """An advisory response was handed to the execution boundary."""


class ConfigurationError(ToliError):
    """The configuration does not describe a usable backend."""
