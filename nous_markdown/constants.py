"""Constants used across the nous-markdown package."""

from __future__ import annotations

from .config import RenderConfig

DEFAULT_CONFIG = RenderConfig()

DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
NOTE_EXTENSIONS = (".md", ".markdown", ".txt")

MAX_FILE_SIZE_ENV_VAR = "NOUS_MARKDOWN_MAX_FILE_SIZE"
