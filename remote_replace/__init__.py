"""Replace the files of a local directory tree with their remote counterparts."""

__version__ = "0.1.0"
