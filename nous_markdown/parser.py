"""Stack-based HTML emitter for the note Markdown subset."""

from __future__ import annotations

import html
import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from .config import RenderConfig
from .exceptions import TokenStreamError
from .filesystem import read_note
from .lexer import BOLD_MARKER, HEADER_MARKER, LIST_MARKER, NEWLINE, SEPARATOR, tokenize
from .models import ParseMode, ParserContext, Tag, TagKind, Token, TokenKind

logger = logging.getLogger(__name__)

# Closed by the newline that ends their line
LINE_SCOPED = frozenset({TagKind.BOLD, TagKind.HEADER, TagKind.LIST_ITEM})
# Block elements whose close markup is followed by a newline
NEWLINE_AFTER_CLOSE = frozenset({TagKind.UNORDERED_LIST, TagKind.LIST_ITEM})


class TagStack:
    """LIFO of open tags; the top is the innermost open element.

    Attributes:
        pushed: Number of tags pushed so far.
        popped: Number of tags popped so far.
    """

    def __init__(self) -> None:
        self._tags: list[Tag] = []
        self.pushed = 0
        self.popped = 0

    def __len__(self) -> int:
        return len(self._tags)

    def __bool__(self) -> bool:
        return bool(self._tags)

    def push(self, tag: Tag) -> None:
        self._tags.append(tag)
        self.pushed += 1

    def peek(self) -> Tag:
        if not self._tags:
            raise TokenStreamError("peek on an empty tag stack")
        return self._tags[-1]

    def pop(self) -> Tag:
        if not self._tags:
            raise TokenStreamError("pop on an empty tag stack")
        self.popped += 1
        return self._tags.pop()

    def top_kind(self) -> TagKind | None:
        return self._tags[-1].kind if self._tags else None

    def contains(self, kind: TagKind) -> bool:
        return any(tag.kind is kind for tag in self._tags)


class Parser:
    """Consume a token stream and write the matching HTML.

    A parser renders one stream; create a new one per note.

    Args:
        tokens: Token stream, normally from `tokenize`.
        config: Rendering switches. Defaults to a new `RenderConfig`.

    Examples:
        Parser(tokenize("# Title\\n")).parse()  # "<h1>Title</h1>"
    """

    def __init__(self, tokens: Iterable[Token], config: RenderConfig | None = None):
        self._tokens = tokens
        self._config = config or RenderConfig()
        self._output: list[str] = []
        self._finished = False
        self.stack = TagStack()
        self.context = ParserContext()
        self._handlers: dict[TokenKind, Callable[[Token], None]] = {
            TokenKind.TEXT: self._on_text,
            TokenKind.HEADER: self._on_header,
            TokenKind.LIST: self._on_list,
            TokenKind.BOLD: self._on_bold,
            TokenKind.NEWLINE: self._on_newline,
            TokenKind.EOF: self._on_eof,
        }

    def parse(self) -> str:
        """Consume every token and return the rendered HTML.

        Returns:
            str: The HTML fragment.

        Raises:
            TokenStreamError: If the stream is not one the lexer can produce
                (error tokens, malformed header runs, tokens after EOF, or a
                missing EOF).
        """
        for token in self._tokens:
            if self._finished:
                raise TokenStreamError("token after end of input", token)
            handler = self._handlers.get(token.kind)
            if handler is None:
                raise TokenStreamError("unexpected token", token)
            handler(token)

        if not self._finished:
            raise TokenStreamError("token stream ended without EOF")

        logger.debug("rendered %d tags", self.stack.pushed)
        return "".join(self._output)

    def _write(self, markup: str) -> None:
        self._output.append(markup)

    def _open(self, tag: Tag) -> None:
        self.stack.push(tag)
        self._write(tag.open_markup)

    def _close_top(self) -> Tag:
        tag = self.stack.pop()
        self._write(tag.close_markup)
        if tag.kind in NEWLINE_AFTER_CLOSE:
            self._write(NEWLINE)
        if tag.kind is TagKind.UNORDERED_LIST:
            self.context.mode = ParseMode.IN_TEXT
        return tag

    def _on_text(self, token: Token) -> None:
        if self._config.escape_text:
            self._write(html.escape(token.value, quote=False))
        else:
            self._write(token.value)

    def _on_header(self, token: Token) -> None:
        if not token.value or token.value.strip(HEADER_MARKER):
            raise TokenStreamError("malformed header marker", token)
        self._open(Tag.header(len(token.value)))

    def _on_list(self, token: Token) -> None:
        if not self._config.lists:
            self._write(LIST_MARKER + SEPARATOR)
            return
        if self.context.mode is not ParseMode.IN_LIST:
            self._open(Tag(TagKind.UNORDERED_LIST))
            self._write(NEWLINE)
            self.context.mode = ParseMode.IN_LIST
        self._open(Tag(TagKind.LIST_ITEM))

    def _on_bold(self, token: Token) -> None:
        if not self._config.bold:
            self._write(BOLD_MARKER)
        elif self.stack.top_kind() is TagKind.BOLD:
            self._close_top()
        elif self.stack.contains(TagKind.BOLD):
            # Closing the outer <b> here would cross the tag opened inside it
            self._write(BOLD_MARKER)
        else:
            self._open(Tag(TagKind.BOLD))

    def _on_newline(self, token: Token) -> None:
        if self.stack.top_kind() is TagKind.UNORDERED_LIST:
            # Blank line after the last item ends the list
            self._close_top()
            return

        closed_block = False
        while self.stack.top_kind() in LINE_SCOPED:
            closed_block = self._close_top().kind is not TagKind.BOLD or closed_block

        if not closed_block:
            self._write(NEWLINE)

    def _on_eof(self, token: Token) -> None:
        while self.stack:
            self._close_top()
        self._finished = True


def render_tokens(tokens: Iterable[Token], config: RenderConfig | None = None) -> str:
    """Render an already tokenized note.

    Args:
        tokens: Token stream ending with EOF.
        config: Rendering switches; defaults to a new `RenderConfig`.

    Returns:
        str: The HTML fragment.

    Raises:
        TokenStreamError: If the token stream is malformed.
    """
    return Parser(tokens, config).parse()


def render(text: str, config: RenderConfig | None = None) -> str:
    """Render a note body to an HTML fragment.

    Total over its input: any text renders. Text content is not HTML-escaped
    unless `config.escape_text` is set.

    Args:
        text: The note body.
        config: Rendering switches; defaults to a new `RenderConfig`.

    Returns:
        str: The HTML fragment.

    Examples:
        render("# The Title\\n")  # "<h1>The Title</h1>"
        render("- one\\n- two")  # "<ul>\\n<li>one</li>\\n<li>two</li>\\n</ul>\\n"
    """
    return render_tokens(tokenize(text), config)


def render_file(filepath: Path, config: RenderConfig | None = None) -> str:
    """Read a UTF-8 note file and render it.

    Args:
        filepath: Path to the note.
        config: Rendering switches and the size limit; defaults to a new
            `RenderConfig`.

    Returns:
        str: The HTML fragment.

    Raises:
        NoteFileError: If the file cannot be read, is too large, or is not valid
            UTF-8.

    Examples:
        html_fragment = render_file(Path("notes/today.md"))
    """
    config = config or RenderConfig()
    content = read_note(filepath, config.max_file_size)
    logger.debug("rendering %s (%d characters)", filepath, len(content))
    return render(content, config)
