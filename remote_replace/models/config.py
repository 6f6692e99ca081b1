"""
Pydantic model for application configuration.
Provides validation for all settings of a replace run.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from remote_replace.utils.path import normalize_remote_base

DEFAULT_CONNECT_TIMEOUT = 15.0
DEFAULT_READ_TIMEOUT = 90.0


class ReplaceConfig(BaseModel):
    """A validated configuration model for a replace run."""

    # Run targets, always supplied on the command line
    source_root: str
    remote_base: str

    # Transfer Settings
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    read_timeout: float = DEFAULT_READ_TIMEOUT

    # Logging
    log_dir: str = ""

    # Internal fields not loaded from INI file
    config_path: str = Field("", repr=False)

    # Paths are taken verbatim: a directory name may end in whitespace
    model_config = ConfigDict(validate_assignment=True)

    @field_validator("remote_base")
    @classmethod
    def validate_remote_base(cls, v: str) -> str:
        """
        Appends the trailing slash. Malformed URLs are accepted here and show
        up later as per-file fetch failures.
        """
        return normalize_remote_base(v.strip())

    @field_validator("connect_timeout", "read_timeout")
    @classmethod
    def validate_timeouts(cls, v: float) -> float:
        """Ensures timeouts are positive."""
        if v <= 0:
            raise ValueError("Timeouts must be greater than zero seconds.")
        return v

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"config_path", "source_root", "remote_base"}
        return {key for key in cls.model_fields if key not in internal_fields}
