# toli/utils/__init__.py
"""
Utility functions for toli.

This package provides common utilities like logging.
"""

from .logging import setup_logging, get_logger

__all__ = ['setup_logging', 'get_logger']
