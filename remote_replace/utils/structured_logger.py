"""
Structured logging for replace runs.
Writes one JSON object per event to a .jsonl file so runs can be audited later.
"""

import json
import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Any


class StructuredLogger:
    """
    Logger that mirrors events to the standard logger at debug level and,
    when a log directory is given, appends them as JSON lines to a file.

    Usage:
        logger = StructuredLogger("remote_replace", log_dir=Path("logs"))
        logger.info("file_replaced", url="https://host/a.txt", size_bytes=42)
    """

    def __init__(self, name: str, log_dir: Path | None = None):
        self.name = name
        self.log_dir = log_dir
        self.enable_json = log_dir is not None

        self._logger = logging.getLogger(name)

        self._json_file = None
        self.json_log_path: Path | None = None
        if self.enable_json:
            log_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self.json_log_path = log_dir / f"remote_replace_{timestamp}.jsonl"
            self._json_file = open(self.json_log_path, "a", encoding="utf-8")  # noqa: SIM115

        # Added to every entry
        self._session_context: dict[str, Any] = {
            "session_id": f"{int(time.time())}_{id(self)}",
        }

    def _format_message(self, event: str, **context) -> str:
        parts = [f"[{event}]"]
        parts.extend(f"{key}={value}" for key, value in context.items())
        return " ".join(parts)

    def _write_json(self, level: str, event: str, **context) -> None:
        if not self._json_file or self._json_file.closed:
            return

        entry = {
            "timestamp": datetime.now().isoformat(),
            "level": level,
            "event": event,
            **self._session_context,
            **context,
        }

        try:
            self._json_file.write(json.dumps(entry) + "\n")
            self._json_file.flush()
        except OSError as e:
            print(f"JSON logging failed: {e}", file=sys.stderr)

    def info(self, event: str, **context) -> None:
        """Log info event."""
        self._logger.debug(self._format_message(event, **context))
        self._write_json("INFO", event, **context)

    def warning(self, event: str, **context) -> None:
        """Log warning event."""
        self._logger.debug(self._format_message(event, **context))
        self._write_json("WARNING", event, **context)

    def close(self) -> None:
        """Close JSON log file."""
        if self._json_file and not self._json_file.closed:
            self._json_file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class ReplaceLogger:
    """Specialized logger for replace run events."""

    def __init__(self, logger: StructuredLogger):
        self.logger = logger

    def run_started(self, source_root: str, remote_base: str, file_count: int):
        self.logger.info(
            "run_started",
            source_root=source_root,
            remote_base=remote_base,
            file_count=file_count,
        )

    def no_files_found(self, source_root: str):
        self.logger.info("no_files_found", source_root=source_root)

    def file_replaced(self, url: str, path: str, size_bytes: int, duration_s: float):
        self.logger.info(
            "file_replaced",
            url=url,
            path=path,
            size_bytes=size_bytes,
            duration_s=round(duration_s, 3),
        )

    def file_failed(self, url: str, path: str, error: str, error_type: str):
        self.logger.warning(
            "file_failed",
            url=url,
            path=path,
            error=error,
            error_type=error_type,
        )

    def run_completed(self, duration_s: float):
        self.logger.info("run_completed", duration_s=round(duration_s, 2))


def create_replace_logger(log_dir: Path | None = None) -> ReplaceLogger:
    """Creates the run event logger; JSON output is enabled by ``log_dir``."""
    return ReplaceLogger(StructuredLogger("remote_replace.events", log_dir=log_dir))
