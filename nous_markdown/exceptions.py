"""Package-specific exception types."""

from __future__ import annotations

from .models import Token


class TokenStreamError(RuntimeError):
    """Raised when the parser receives a token stream the lexer cannot produce.

    This signals a bug in the lexer or parser, never bad note text.

    Args:
        message: Description of the broken invariant.
        token: Offending token, when one is involved.
    """

    def __init__(self, message: str, token: Token | None = None):
        self.token = token
        if token is not None:
            message = f"{message} ({token.kind.name} {token} at offset {token.offset})"
        super().__init__(message)


class TodoNotFoundError(ValueError):
    """Raised when a note body has no task box at the requested index.

    Args:
        index: Zero-based index of the requested task.
        count: Number of task boxes found in the body.
    """

    def __init__(self, index: int, count: int):
        self.index = index
        self.count = count
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        if self.count == 0:
            return "No todos found"
        return f"Todo {self.index} not found (note has {self.count} todos)"


class NoteFileError(OSError):
    """Raised when a note file cannot be read or rendered output cannot be written."""
