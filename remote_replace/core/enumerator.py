"""
Discovers the regular files of the source tree.
"""

import os


def iter_source_files(source_root: str) -> list[str]:
    """
    Recursively lists every regular file under ``source_root``.

    Directories are excluded. Symlinked directories are not descended into
    (the ``os.walk`` default). The result is sorted so console output is
    stable between runs.
    """
    files = []
    for dirpath, _dirnames, filenames in os.walk(source_root):
        for name in filenames:
            path = os.path.join(dirpath, name)
            if os.path.isfile(path):
                files.append(path)
    return sorted(files)
