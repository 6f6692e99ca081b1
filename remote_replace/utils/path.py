"""
Utilities for handling local paths and mapping them onto remote URLs.
"""

import os
from urllib.parse import quote

from remote_replace.exceptions import DirectoryNotFoundError


def normalize_source_root(path: str) -> str:
    """Ensures a directory path ends with the local path separator."""
    if path.endswith(os.sep) or (os.altsep and path.endswith(os.altsep)):
        return path
    return path + os.sep


def normalize_remote_base(url: str) -> str:
    """Ensures a base URL ends with '/'. The URL itself is not validated."""
    if url.endswith("/"):
        return url
    return url + "/"


def validate_source_root(path: str) -> str:
    """
    Checks that the source directory exists and returns it normalized with a
    trailing separator.

    Raises:
        DirectoryNotFoundError: If the path is missing or is not a directory.
    """
    if not os.path.isdir(path):
        raise DirectoryNotFoundError(path)
    return normalize_source_root(os.path.abspath(path))


def relative_path(file_path: str, source_root: str) -> str:
    """
    Strips the source root prefix from a file path. The result is in local
    path syntax and never contains the root itself.
    """
    root = normalize_source_root(source_root)
    if not file_path.startswith(root) or len(file_path) == len(root):
        raise ValueError(f"'{file_path}' is not a file under '{root}'")
    return file_path[len(root) :]


def to_url_path(relative: str) -> str:
    """Converts every local path separator into '/'."""
    url_path = relative.replace(os.sep, "/")
    if os.altsep:
        url_path = url_path.replace(os.altsep, "/")
    return url_path


def build_remote_url(file_path: str, source_root: str, remote_base: str) -> str:
    """
    Maps a file under the source root onto its remote URL.

    The relative path is escaped once, segment by segment, with '/' kept as
    the delimiter. The base URL is used as given, apart from the trailing
    slash.
    """
    url_path = to_url_path(relative_path(file_path, source_root))
    return normalize_remote_base(remote_base) + quote(url_path, safe="/")
