"""Filesystem helpers for deckdown."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import BinaryIO, TextIO

from .constants import DEFAULT_CONFIG
from .exceptions import SlideTooLargeError

MAX_FILE_SIZE_ENV_VAR = "DECKDOWN_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_CONFIG.max_file_size) -> int:
    """Resolve the maximum allowed file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["DECKDOWN_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def enforce_file_size(filepath: Path, max_size: int):
    """Guard against files that exceed the configured maximum size.

    Raises:
        SlideTooLargeError: If the file is larger than `max_size` bytes.
        IOError: If the file cannot be inspected.
    """
    try:
        size = filepath.stat().st_size
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    if size > max_size:
        raise SlideTooLargeError(filepath, max_size)


def safe_read(filepath: Path, encoding: str = "UTF-8") -> TextIO:
    """Open a file for reading with consistent error handling.

    Args:
        filepath: Path to the file.
        encoding: Text encoding passed to `open`.

    Returns:
        TextIO: File handle opened for reading in `encoding`.

    Raises:
        IOError: If the path is missing, inaccessible, or not a file.

    Examples:
        with safe_read(Path("slides/01.md")) as handle:
            text = handle.read()
    """
    try:
        return open(filepath, "r", encoding=encoding)
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error


def safe_read_bytes(filepath: Path) -> BinaryIO:
    """Binary counterpart of `safe_read`, used for assets."""
    try:
        return open(filepath, "rb")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error


def read_text(filepath: Path, max_size: int | None = None) -> str:
    """Read a UTF-8 text file after checking its size.

    A leading byte order mark is dropped so it cannot hide a heading marker.

    Args:
        filepath: File to read.
        max_size: Size limit in bytes; resolved with `get_max_file_size` when None.

    Raises:
        SlideTooLargeError: If the file exceeds the size limit.
        IOError: If the file cannot be opened or is not valid UTF-8.
    """
    limit = get_max_file_size() if max_size is None else max_size
    enforce_file_size(filepath, limit)
    try:
        with safe_read(filepath, encoding="utf-8-sig") as file:
            return file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise IOError(error_message) from error


def write_atomic(filepath: Path, content: str):
    """Write text to `filepath` through a temporary file in the same directory.

    The target is replaced in a single `os.replace` so readers never observe a
    partially written bundle.

    Raises:
        IOError: If the temporary file cannot be written or moved into place.
    """
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(content)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
        os.chmod(temp_path, 0o644)
        os.replace(temp_path, filepath)
    except OSError as error:
        error_message = f"Error writing {filepath}: {error}"
        raise IOError(error_message) from error
    finally:
        if temp_path is not None:
            try:
                Path(temp_path).unlink(missing_ok=True)
            except OSError:
                pass
