"""
Handles the low-level fetching of remote files over HTTP and the in-place
overwrite of their local counterparts.
"""

import asyncio
import logging

import aiofiles
import aiohttp

from remote_replace.exceptions import FetchError, WriteError
from remote_replace.models.config import DEFAULT_CONNECT_TIMEOUT, DEFAULT_READ_TIMEOUT

log = logging.getLogger(__name__)


def describe_fetch_error(error: Exception) -> str:
    """Turns a transport or HTTP error into a short human-readable message."""
    if isinstance(error, aiohttp.ClientResponseError):
        return f"HTTP {error.status} {error.message}".strip()
    if isinstance(error, asyncio.TimeoutError):
        return "Request timed out"
    return str(error) or type(error).__name__


class Downloader:
    """
    Fetches one file at a time through a single HTTP session and writes each
    response body over an existing local file.

    Used as an async context manager; the session lives for the duration of
    the ``async with`` block.
    """

    def __init__(
        self,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
    ):
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "Downloader":
        connector = aiohttp.TCPConnector(
            limit=1,
            ttl_dns_cache=600,  # 10 minutes
            keepalive_timeout=30,
            enable_cleanup_closed=True,
        )
        timeout = aiohttp.ClientTimeout(
            total=None,
            sock_connect=self.connect_timeout,
            sock_read=self.read_timeout,
        )
        self._session = aiohttp.ClientSession(connector=connector, timeout=timeout)
        log.debug("Opened HTTP session for downloads.")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
            log.debug("HTTP session closed.")
        self._session = None

    async def fetch(self, url: str, destination_path: str) -> bytes:
        """
        Downloads the whole body of ``url``. The destination path is only
        used for error reporting.

        Raises:
            FetchError: On transport errors, timeouts, invalid URLs and
            non-2xx responses.
        """
        if self._session is None:
            raise RuntimeError("Downloader must be used inside 'async with'.")
        try:
            async with self._session.get(url) as response:
                response.raise_for_status()
                return await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise FetchError(url, destination_path, describe_fetch_error(e)) from e

    async def replace(self, url: str, destination_path: str) -> int:
        """
        Fetches ``url`` and overwrites ``destination_path`` with the body.

        The local file is opened only after the full body has arrived, so a
        failed fetch leaves it untouched. A file that has disappeared since
        enumeration is reported as a write failure and is not recreated.

        Returns:
            The number of bytes written.

        Raises:
            FetchError: If the remote file could not be fetched.
            WriteError: If the local file could not be overwritten.
        """
        body = await self.fetch(url, destination_path)
        try:
            # r+b fails on a missing path instead of creating it
            async with aiofiles.open(destination_path, "r+b") as f:
                await f.write(body)
                await f.truncate()
        except OSError as e:
            raise WriteError(url, destination_path, e.strerror or str(e)) from e
        log.debug(f"Wrote {len(body)} bytes from {url} to '{destination_path}'.")
        return len(body)
