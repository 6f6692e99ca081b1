"""
Storage Layer.

This package handles the persistent configuration file.
"""

from .config_manager import ConfigManager

__all__ = ["ConfigManager"]
