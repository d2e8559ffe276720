# toli/__init__.py
"""
toli: Terminal Intelligence & Learning Operator.

Natural language interface for shell commands backed by a pluggable
language model.
"""

__version__ = '0.1.0'
