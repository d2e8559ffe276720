# toli/components/execution/__init__.py
"""
Command execution for toli.
"""
from .engine import ExecutionEngine, execution_engine

__all__ = ['ExecutionEngine', 'execution_engine']
