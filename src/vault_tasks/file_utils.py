"""File utility functions."""

import os
import tempfile
from pathlib import Path
from typing import Union


class FileError(Exception):
    """Base class for file-related errors."""


class FileWriteError(FileError):
    """Error writing to a file."""


def read_text(path: Union[str, Path]) -> str:
    """Read a markdown file as UTF-8 text without newline translation.

    Args:
        path: Path to the file

    Returns:
        File contents with line endings preserved
    """
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_file_atomic(path: Union[str, Path], content: str) -> None:
    """Write file atomically using a temporary file.

    Args:
        path: Path to write to
        content: Content to write

    Raises:
        FileWriteError: If the file cannot be written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    # Create temp file in same directory
    fd, temp_path = tempfile.mkstemp(dir=str(path.parent))
    success = False

    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        # Atomic rename
        Path(temp_path).replace(path)
        success = True
    except OSError as e:
        raise FileWriteError(f"Failed to write {path}: {e}") from e
    finally:
        if not success:
            try:
                Path(temp_path).unlink()
            except OSError:
                pass
