# toli/components/shell/__init__.py
"""
Terminal display and interactive selection of suggestions.
"""
from .formatter import terminal_formatter, TerminalFormatter
from .selection import executable_responses, select_response, confirm_script

__all__ = [
    'terminal_formatter', 'TerminalFormatter',
    'executable_responses', 'select_response', 'confirm_script',
]
