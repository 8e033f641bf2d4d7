"""
Command-line interface for the stayfocused package.
"""

from .main import build_parser, load_config, main_cli, run_daemon

__all__ = ["build_parser", "load_config", "main_cli", "run_daemon"]
