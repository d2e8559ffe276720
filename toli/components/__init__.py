# toli/components/__init__.py
"""
Components for toli: model backends, execution and terminal display.
"""
