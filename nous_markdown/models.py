"""Data models for nous-markdown."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    """Kinds of tokens produced by the lexer.

    Attributes:
        ERROR: Reserved for broken streams; the lexer never emits it.
        EOF: Synthesized end-of-input marker with an empty value.
        HEADER: A run of ``#`` characters followed by a space.
        TEXT: Literal text between markers.
        NEWLINE: A single ``\\n``.
        LIST: A ``-`` followed by a space.
        BOLD: A single ``*``.
    """

    ERROR = auto()
    EOF = auto()
    HEADER = auto()
    TEXT = auto()
    NEWLINE = auto()
    LIST = auto()
    BOLD = auto()


@dataclass(frozen=True)
class Token:
    """A lexical unit handed from the lexer to the parser.

    Attributes:
        kind: What the token represents.
        value: Exact substring of the input covered by the token.
        offset: Zero-based index in the input where the token starts.
    """

    kind: TokenKind
    value: str
    offset: int = 0

    def __str__(self) -> str:
        if self.kind is TokenKind.EOF:
            return "EOF"
        if self.kind is TokenKind.ERROR:
            return self.value
        if len(self.value) > 10:
            return f"{self.value[:10]!r}..."
        return repr(self.value)


class TagKind(Enum):
    """HTML elements the parser can hold open."""

    HEADER = auto()
    UNORDERED_LIST = auto()
    LIST_ITEM = auto()
    BOLD = auto()


_ELEMENTS = {
    TagKind.UNORDERED_LIST: "ul",
    TagKind.LIST_ITEM: "li",
    TagKind.BOLD: "b",
}


@dataclass(frozen=True)
class Tag:
    """An open HTML element waiting on the parser's stack.

    Attributes:
        kind: Element kind.
        level: Heading level for `TagKind.HEADER`; zero for every other kind.

    Examples:
        Tag.header(2).open_markup  # "<h2>"
        Tag(TagKind.LIST_ITEM).close_markup  # "</li>"
    """

    kind: TagKind
    level: int = 0

    @classmethod
    def header(cls, level: int) -> Tag:
        if level < 1:
            raise ValueError(f"Header level must be >= 1, got {level}")
        return cls(TagKind.HEADER, level)

    @property
    def element(self) -> str:
        if self.kind is TagKind.HEADER:
            return f"h{self.level}"
        return _ELEMENTS[self.kind]

    @property
    def open_markup(self) -> str:
        return f"<{self.element}>"

    @property
    def close_markup(self) -> str:
        return f"</{self.element}>"


class ParseMode(Enum):
    """Block context the parser is in.

    Attributes:
        IN_TEXT: Outside any list.
        IN_LIST: Inside an open ``<ul>``; further list markers add items to it.
    """

    IN_TEXT = auto()
    IN_LIST = auto()


@dataclass
class ParserContext:
    """Mutable parser state that is not captured by the tag stack.

    Attributes:
        mode: Current block context.
    """

    mode: ParseMode = ParseMode.IN_TEXT
