"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class RemoteReplaceError(Exception):
    """Base exception for all application-specific errors."""


class DirectoryNotFoundError(RemoteReplaceError):
    """Raised when the source directory does not exist or is not a directory."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Directory '{path}' does not exist or is not a directory.")


class ConfigurationError(RemoteReplaceError):
    """Raised for issues related to configuration loading or validation."""


class ReplaceFileError(RemoteReplaceError):
    """
    Raised when a single file could not be replaced. The replace loop recovers
    from it and moves on to the next file.
    """

    def __init__(self, url: str, path: str, message: str):
        self.url = url
        self.path = path
        self.message = message
        super().__init__(f"{url} -> {path}: {message}")


class FetchError(ReplaceFileError):
    """Raised when the remote file could not be fetched (transport or HTTP status)."""


class WriteError(ReplaceFileError):
    """Raised when the fetched body could not be written over the local file."""
