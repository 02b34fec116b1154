"""
Command-line interface for the unityrunner package.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
