"""
nous-markdown: renders personal notes written in a small Markdown subset to HTML.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    nous-markdown today.md

Library Usage:
    from nous_markdown import render, tokenize

    fragment = render("# Today\\n- milk\\n- eggs\\n")
    kinds = [token.kind for token in tokenize("*bold*")]
"""

from .config import ConfigError, RenderConfig
from .exceptions import NoteFileError, TodoNotFoundError, TokenStreamError
from .filesystem import read_note, resolve_note_path
from .lexer import Lexer, reconstruct, tokenize
from .models import Tag, TagKind, Token, TokenKind
from .notes import extract_people, render_notes, toggle_todo
from .parser import Parser, TagStack, render, render_file, render_tokens

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "tokenize",
    "render",
    "render_tokens",
    "render_file",
    "render_notes",
    "read_note",
    "resolve_note_path",
    "Lexer",
    "Parser",
    "TagStack",
    "reconstruct",
    # Note helpers
    "extract_people",
    "toggle_todo",
    # Data models
    "Token",
    "TokenKind",
    "Tag",
    "TagKind",
    "RenderConfig",
    # Exceptions
    "ConfigError",
    "NoteFileError",
    "TodoNotFoundError",
    "TokenStreamError",
    # Version
    "__version__",
]
