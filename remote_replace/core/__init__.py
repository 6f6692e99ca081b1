"""
Core application engine for the replace run.

`iter_source_files` discovers the local files, and the `Replacer` walks
them one by one, fetching each remote counterpart through the `Downloader`.
"""

from .enumerator import iter_source_files
from .replacer import Replacer

__all__ = ["Replacer", "iter_source_files"]
