"""File helpers."""

from __future__ import annotations

import os


def file_exists(filename: str | os.PathLike[str]) -> bool:
    """Return whether ``filename`` names a file that can be opened for reading."""
    try:
        with open(filename, "rb"):
            return True
    except OSError:
        return False