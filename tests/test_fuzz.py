from __future__ import annotations

import os

import pytest
from nous_markdown.lexer import reconstruct, tokenize
from nous_markdown.parser import Parser

atheris = pytest.importorskip("atheris")


def test_tokenize_with_fuzzed_input():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    seen = 0

    for _ in range(128):
        if provider.remaining_bytes() == 0:
            break
        text = provider.ConsumeUnicodeNoSurrogates(64)
        assert reconstruct(tokenize(text)) == text
        seen += 1

    assert seen  # ensure we exercised the loop


def test_render_with_fuzzed_markdown():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    lines: list[str] = []

    while provider.remaining_bytes() > 0 and len(lines) < 32:
        prefix = provider.PickValueInList(["", "# ", "## ", "- ", "*", "#"])
        lines.append(prefix + provider.ConsumeUnicodeNoSurrogates(32))

    parser = Parser(tokenize("\n".join(lines)))
    parser.parse()
    assert len(parser.stack) == 0
