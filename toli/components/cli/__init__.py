# toli/components/cli/__init__.py
"""
Command-line interface for toli.
"""
from .main import app

__all__ = ['app']
