"""
The per-file unit of work linking a local path to its remote URL.
"""

from dataclasses import dataclass

from remote_replace.utils.path import build_remote_url, relative_path


@dataclass(frozen=True)
class FileTask:
    """A single local file and the URL its new contents are fetched from."""

    absolute_local_path: str
    relative_path: str
    remote_url: str

    @classmethod
    def from_path(
        cls, file_path: str, source_root: str, remote_base: str
    ) -> "FileTask":
        """Builds a task for a file discovered under the source root."""
        return cls(
            absolute_local_path=file_path,
            relative_path=relative_path(file_path, source_root),
            remote_url=build_remote_url(file_path, source_root, remote_base),
        )
