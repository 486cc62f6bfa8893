"""Helpers that work on whole note bodies."""

from __future__ import annotations

import re
from collections.abc import Iterable

from .config import RenderConfig
from .exceptions import TodoNotFoundError
from .parser import render

PERSON_PATTERN = re.compile(r"\B@(\w+)", re.ASCII)
TODO_PATTERN = re.compile(r"- \[[ xX]\]")

TODO_DONE = "- [x]"
TODO_OPEN = "- [ ]"


def extract_people(text: str) -> list[str]:
    """Find people mentioned in a note as ``@name``.

    A mention must not be glued to a preceding word character, so e-mail
    addresses are skipped.

    Args:
        text: Note body.

    Returns:
        list[str]: Mentioned names without the ``@``, in order of appearance.

    Examples:
        extract_people("ask @hannah, cc mike@example.com")  # ["hannah"]
    """
    return PERSON_PATTERN.findall(text)


def toggle_todo(body: str, index: int) -> str:
    """Flip the checkbox of one task in a note body.

    Args:
        body: Note body containing ``- [ ]`` / ``- [x]`` tasks.
        index: Zero-based index of the task among all tasks in the body.

    Returns:
        str: The body with that task's box checked or unchecked.

    Raises:
        TodoNotFoundError: If the body has no task at `index`.

    Examples:
        toggle_todo("- [ ] milk\\n- [ ] eggs", 1)  # "- [ ] milk\\n- [x] eggs"
    """
    tasks = list(TODO_PATTERN.finditer(body))
    if index < 0 or index >= len(tasks):
        raise TodoNotFoundError(index, len(tasks))

    match = tasks[index]
    todo = TODO_OPEN if match.group(0) != TODO_OPEN else TODO_DONE
    return body[: match.start()] + todo + body[match.end() :]


def render_notes(bodies: Iterable[str], config: RenderConfig | None = None) -> list[str]:
    """Render several note bodies, each independently.

    Args:
        bodies: Note bodies in display order.
        config: Rendering switches shared by every note.

    Returns:
        list[str]: One HTML fragment per body, in the same order.
    """
    config = config or RenderConfig()
    return [render(body, config) for body in bodies]
