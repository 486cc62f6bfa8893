"""Reading and writing note files."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE, MAX_FILE_SIZE_ENV_VAR, NOTE_EXTENSIONS
from .exceptions import NoteFileError


def env_with_fallback(name: str, fallback: str | None = None) -> str | None:
    """Return the environment variable `name`, or `fallback` when it is unset."""
    return os.environ.get(name, fallback)


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the note size limit, letting the environment override `default`.

    Raises:
        ValueError: If ``NOUS_MARKDOWN_MAX_FILE_SIZE`` is set but is not a
            positive integer.

    Examples:
        os.environ["NOUS_MARKDOWN_MAX_FILE_SIZE"] = "4096"
        get_max_file_size()  # 4096
    """
    raw = env_with_fallback(MAX_FILE_SIZE_ENV_VAR)
    if raw is None:
        return default
    if not raw.strip().isdecimal() or int(raw) == 0:
        raise ValueError(f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {raw!r}")
    return int(raw)


def resolve_note_path(raw_path: str, base_dir: Path) -> Path:
    """Turn a user-supplied note path into an absolute path under `base_dir`.

    The path, and every directory above it, must not be a symlink. The note must
    be a regular file with one of the note extensions.

    Args:
        raw_path: Absolute or relative path, ``~`` allowed.
        base_dir: Resolved working directory the note must live under.

    Returns:
        Path: Resolved path to the note.

    Raises:
        ValueError: If any of the conditions above does not hold.

    Examples:
        resolve_note_path("journal/today.md", Path.cwd())
    """
    path = Path(raw_path).expanduser()

    for part in (path, *path.parents):
        if part.is_symlink():
            raise ValueError(f"Symlinks are not supported for security reasons: {path}")

    try:
        note = path.resolve(strict=True)
    except OSError as error:
        raise ValueError(f"{path} does not exist or cannot be resolved: {error}") from error

    if not note.is_file():
        raise ValueError(f"{note} is not a regular file.")
    if not note.is_relative_to(base_dir):
        raise ValueError(f"{note} is outside of the working directory {base_dir}.")
    if note.suffix.lower() not in NOTE_EXTENSIONS:
        raise ValueError(
            f"{note} is not a note file.\nSupported extensions are: {', '.join(NOTE_EXTENSIONS)}"
        )
    return note


def read_note(filepath: Path, max_size: int = DEFAULT_MAX_FILE_SIZE) -> str:
    """Read a note body, refusing anything that is not a small UTF-8 file.

    Args:
        filepath: Path to the note.
        max_size: Largest accepted size in bytes.

    Returns:
        str: The decoded note body.

    Raises:
        NoteFileError: If the file is missing, a symlink, not a regular file,
            larger than `max_size`, or not valid UTF-8.

    Examples:
        body = read_note(Path("today.md"), max_size=4096)
    """
    try:
        info = os.lstat(filepath)
        if not stat.S_ISREG(info.st_mode):
            raise NoteFileError(f"{filepath} is not a regular file (symlinks are not supported).")
        if info.st_size > max_size:
            raise NoteFileError(f"{filepath} exceeds the maximum allowed size of {max_size} bytes.")
        data = filepath.read_bytes()
    except NoteFileError:
        raise
    except OSError as error:
        raise NoteFileError(f"Error accessing {filepath}: {error}") from error

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as error:
        raise NoteFileError(f"Invalid UTF-8 sequence in {filepath}: {error}") from error


def write_output(filepath: Path, content: str):
    """Write rendered HTML to a file atomically.

    The content goes to a temporary file in the target directory, which then
    replaces `filepath`. An existing target keeps its permissions.

    Raises:
        NoteFileError: If the target is a symlink or the file cannot be written.

    Examples:
        write_output(Path("today.html"), "<h1>Today</h1>")
    """
    if filepath.is_symlink():
        raise NoteFileError(f"Symlinks are not supported: {filepath}.")

    permissions = stat.S_IMODE(filepath.stat().st_mode) if filepath.exists() else None

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(content)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
            if permissions is not None:
                os.chmod(tmp_file.name, permissions)

        os.replace(temp_path, filepath)
    except OSError as error:
        raise NoteFileError(f"Error writing {filepath}: {error}") from error
    finally:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
