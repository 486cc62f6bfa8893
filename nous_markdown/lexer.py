"""State-function lexer for the note Markdown subset.

Each state is a method that consumes some input, possibly emits tokens, and
returns the next state (``None`` once the input is exhausted). Tokens are
yielded after every state step, so the parser pulls them lazily.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterable, Iterator
from typing import Optional

from .models import Token, TokenKind

logger = logging.getLogger(__name__)

EOF = ""

HEADER_MARKER = "#"
LIST_MARKER = "-"
BOLD_MARKER = "*"
NEWLINE = "\n"
SEPARATOR = " "

StateFn = Callable[[], Optional["StateFn"]]


class Lexer:
    """Scan note text into a stream of `Token` objects.

    Attributes:
        name: Label used in log messages and errors.
        text: Input being scanned.
        start: Start of the token currently being accumulated.
        pos: Current scan position.
        width: Width of the last character read; zero at end of input.

    Examples:
        [str(token) for token in Lexer("# Title").tokens()]
        # ["'#'", "'Title'", "EOF"]
    """

    def __init__(self, text: str, name: str = "markdown"):
        self.name = name
        self.text = text
        self.start = 0
        self.pos = 0
        self.width = 0
        self._pending: deque[Token] = deque()
        self._started = False
        # Checked in this order at every scan position
        self._markers: tuple[tuple[str, StateFn], ...] = (
            (LIST_MARKER, self._lex_list),
            (NEWLINE, self._lex_newline),
            (HEADER_MARKER, self._lex_header),
            (BOLD_MARKER, self._lex_bold),
        )

    def tokens(self) -> Iterator[Token]:
        """Run the state machine, yielding tokens as they are emitted.

        Returns:
            Iterator[Token]: Tokens in input order, ending with a single EOF token.

        Raises:
            RuntimeError: If this lexer has already produced its stream.
        """
        if self._started:
            raise RuntimeError(f"{self.name}: token stream already consumed")
        self._started = True
        return self._run()

    def _run(self) -> Iterator[Token]:
        count = 0
        state: StateFn | None = self._lex_text
        while state is not None:
            state = state()
            while self._pending:
                count += 1
                yield self._pending.popleft()
        logger.debug("%s: lexed %d tokens from %d characters", self.name, count, len(self.text))

    def _emit(self, kind: TokenKind) -> None:
        self._pending.append(Token(kind, self.text[self.start : self.pos], self.start))
        self.start = self.pos

    def _flush_text(self) -> None:
        if self.pos > self.start:
            self._emit(TokenKind.TEXT)

    def _lex_text(self) -> StateFn | None:
        while True:
            for marker, state in self._markers:
                if self.text.startswith(marker, self.pos):
                    self._flush_text()
                    return state
            if self._next() == EOF:
                break
        self._flush_text()
        self._emit(TokenKind.EOF)
        return None

    def _lex_header(self) -> StateFn:
        if self._accept(HEADER_MARKER):
            self._accept_run(HEADER_MARKER)
        # Without the space the run stays pending text
        if self._peek() == SEPARATOR:
            self._emit(TokenKind.HEADER)
            self._next()
            self._ignore()
        return self._lex_text

    def _lex_list(self) -> StateFn:
        if self._accept(LIST_MARKER) and self._peek() == SEPARATOR:
            self._emit(TokenKind.LIST)
            self._next()
            self._ignore()
        return self._lex_text

    def _lex_bold(self) -> StateFn:
        if self._accept(BOLD_MARKER):
            self._emit(TokenKind.BOLD)
        return self._lex_text

    def _lex_newline(self) -> StateFn:
        if self._accept(NEWLINE):
            self._emit(TokenKind.NEWLINE)
        return self._lex_text

    def _next(self) -> str:
        if self.pos >= len(self.text):
            self.width = 0
            return EOF
        char = self.text[self.pos]
        self.width = 1
        self.pos += self.width
        return char

    def _backup(self) -> None:
        self.pos -= self.width

    def _peek(self) -> str:
        char = self._next()
        self._backup()
        return char

    def _ignore(self) -> None:
        self.start = self.pos

    def _accept(self, valid: str) -> bool:
        char = self._next()
        if char != EOF and char in valid:
            return True
        self._backup()
        return False

    def _accept_run(self, valid: str) -> None:
        while self._accept(valid):
            pass


def tokenize(text: str, name: str = "markdown") -> Iterator[Token]:
    """Tokenize note text.

    Any text is valid input. Markers that do not match the syntax (for example
    ``##Title`` or ``-item``) are returned as part of TEXT tokens.

    Args:
        text: The note body to scan.
        name: Label used in log messages.

    Returns:
        Iterator[Token]: Lazy, single-pass token stream ending with EOF.

    Examples:
        [token.kind for token in tokenize("- item")]
        # [TokenKind.LIST, TokenKind.TEXT, TokenKind.EOF]
    """
    return Lexer(text, name).tokens()


def reconstruct(tokens: Iterable[Token]) -> str:
    """Rebuild the scanned text from a token stream.

    Re-inserts the separator space the lexer drops after header and list markers.

    Args:
        tokens: Tokens produced by `tokenize`.

    Returns:
        str: The original input.
    """
    parts = []
    for token in tokens:
        parts.append(token.value)
        if token.kind in (TokenKind.HEADER, TokenKind.LIST):
            parts.append(SEPARATOR)
    return "".join(parts)
