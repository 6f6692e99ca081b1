"""
Data Models Layer.

This package contains the models that define the core data structures
used throughout the application, such as configuration and file tasks.
"""

from .config import ReplaceConfig
from .task import FileTask

__all__ = ["FileTask", "ReplaceConfig"]
