"""
Transfer Layer.

This package is responsible for fetching remote files and overwriting
their local counterparts.
"""

from .downloader import Downloader

__all__ = ["Downloader"]
