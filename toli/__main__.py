# toli/__main__.py
"""
Entry point for toli.
"""
from toli.components.cli import app

if __name__ == "__main__":
    app()
