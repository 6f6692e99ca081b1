"""
The main orchestrator: enumerates the source tree and replaces every file
with its remote counterpart, one file at a time.
"""

import asyncio
import logging
import time
from typing import Callable

from rich.console import Console
from rich.markup import escape

from remote_replace.cli.formatters import (
    print_empty_notice,
    print_file_status,
    print_start_banner,
)
from remote_replace.exceptions import ReplaceFileError
from remote_replace.models.config import ReplaceConfig
from remote_replace.models.task import FileTask
from remote_replace.transfer.downloader import Downloader
from remote_replace.utils.path import validate_source_root
from remote_replace.utils.structured_logger import ReplaceLogger, create_replace_logger

from .enumerator import iter_source_files

log = logging.getLogger(__name__)


class Replacer:
    """Orchestrates the entire replace run."""

    def __init__(
        self,
        config: ReplaceConfig,
        console: Console | None = None,
        events: ReplaceLogger | None = None,
        downloader_factory: Callable[..., Downloader] | None = None,
    ):
        self.config = config
        self.console = console or Console()
        self.events = events or create_replace_logger()
        self.downloader_factory = downloader_factory or Downloader

    async def run(self) -> int:
        """
        Replaces every file under the source root.

        Returns:
            The number of files found. Zero means nothing was fetched.

        Raises:
            DirectoryNotFoundError: If the source root is missing. Raised
            before any file is touched or any request is made.
        """
        source_root = validate_source_root(self.config.source_root)
        print_start_banner(self.console, self.config)
        files = await asyncio.to_thread(iter_source_files, source_root)

        if not files:
            print_empty_notice(self.console, source_root)
            self.events.no_files_found(source_root)
            return 0

        log.debug(f"Found {len(files)} files under '{source_root}'.")
        self.events.run_started(source_root, self.config.remote_base, len(files))
        start_time = time.monotonic()

        async with self.downloader_factory(
            connect_timeout=self.config.connect_timeout,
            read_timeout=self.config.read_timeout,
        ) as downloader:
            for file_path in files:
                task = FileTask.from_path(
                    file_path, source_root, self.config.remote_base
                )
                await self.replace_file(downloader, task)

        self.events.run_completed(time.monotonic() - start_time)
        return len(files)

    async def replace_file(self, downloader: Downloader, task: FileTask) -> bool:
        """
        Replaces a single file. Failures are reported and swallowed so the
        run can move on to the next file.
        """
        self.console.print(f"Replacing {escape(task.relative_path)}... ", end="")
        start_time = time.monotonic()
        try:
            size = await downloader.replace(task.remote_url, task.absolute_local_path)
        except ReplaceFileError as e:
            print_file_status(self.console, success=False)
            log.warning(
                f"[yellow]Could not replace '{escape(e.path)}' from "
                f"{escape(e.url)}: {escape(e.message)}[/yellow]"
            )
            self.events.file_failed(e.url, e.path, e.message, type(e).__name__)
            return False

        print_file_status(self.console, success=True, size=size)
        self.events.file_replaced(
            task.remote_url,
            task.absolute_local_path,
            size,
            time.monotonic() - start_time,
        )
        return True
