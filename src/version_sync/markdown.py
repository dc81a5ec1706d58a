"""
Fenced code block extraction from Markdown.

The scan is a line-by-line state machine instead of a full Markdown
parse: fence detection, fence-character counting and block-quote
prefixes are all line-local. Only what a manifest check needs is
recognised (fenced blocks, possibly inside block quotes or list items);
indented code blocks and all other markup are treated as plain text.

List items are tracked just far enough to know their content indent, so
a fence indented under ``1. Add this:`` is still a fence and not an
indented code block.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from .utils.fs import normalize_newlines

NO_SYNC = "no_sync"

FENCE_RE = re.compile(r"^(?P<indent> *)(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
QUOTE_RE = re.compile(r"^ {0,3}> ?")
LIST_ITEM_RE = re.compile(r"^(?P<lead> *)(?P<marker>[-*+]|\d{1,9}[.)])(?P<gap> +|$)")
INFO_SPLIT_RE = re.compile(r"[\s,]+")


class LineState(Enum):
    OUTSIDE = "outside"
    IN_CANDIDATE = "in-candidate"
    IN_OTHER = "in-other"


@dataclass(frozen=True)
class ManifestBlock:
    """A fenced code block tagged with a manifest language."""

    language: str
    excluded: bool
    first_line: int  # 1-based line of the opening fence
    content: str

    @property
    def content_line(self) -> int:
        """Line number of the first line between the fences."""
        return self.first_line + 1


def parse_info_string(info: str) -> list[str]:
    return [token for token in INFO_SPLIT_RE.split(info.strip()) if token]


def _strip_quotes(line: str, limit: Optional[int] = None) -> tuple[int, str]:
    """Strip up to `limit` block-quote markers; return (depth, rest)."""
    depth = 0
    while limit is None or depth < limit:
        m = QUOTE_RE.match(line)
        if not m:
            break
        depth += 1
        line = line[m.end():]
    return depth, line


def _list_item_indent(line: str) -> Optional[int]:
    """Return the content indent of a list item line, or None."""
    m = LIST_ITEM_RE.match(line)
    if not m:
        return None
    gap = len(m.group("gap"))
    if 1 <= gap <= 4:
        return m.end()
    # Empty item, or content that starts with an indented code block.
    return m.end("marker") + 1


def _is_closing_fence(line: str, char: str, length: int, base: int = 0) -> bool:
    stripped = line.lstrip(" ")
    if len(line) - len(stripped) - base > 3:
        return False
    run = len(stripped) - len(stripped.lstrip(char))
    return run >= length and not stripped[run:].strip()


def _remove_indent(line: str, width: int) -> str:
    n = 0
    while n < width and n < len(line) and line[n] == " ":
        n += 1
    return line[n:]


def find_manifest_blocks(text: str, language: str = "toml") -> Iterator[ManifestBlock]:
    """Yield fenced blocks tagged `language` that are not marked ``no_sync``.

    The first token of the info string is the language tag; the block is
    skipped if any later token is ``no_sync``. Line numbers count every
    line of `text`, fences and skipped blocks included. A fence left open
    runs to the end of its container (the document or the block quote).
    """
    lines = normalize_newlines(text).split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    state = LineState.OUTSIDE
    fence_char = ""
    fence_len = 0
    fence_indent = 0
    fence_base = 0
    list_indent = 0
    quote_depth = 0
    first_line = 0
    tokens: list[str] = []
    body: list[str] = []

    def finish() -> ManifestBlock:
        content = "".join(line + "\n" for line in body)
        return ManifestBlock(tokens[0], False, first_line, content)

    lineno = 0
    while lineno < len(lines):
        raw = lines[lineno]

        if state is LineState.OUTSIDE:
            depth, line = _strip_quotes(raw)
            lineno += 1
            if not line.strip():
                continue
            offset = 0
            item_indent = _list_item_indent(line)
            if item_indent is not None:
                list_indent = offset = item_indent
            elif len(line) - len(line.lstrip(" ")) < list_indent:
                list_indent = 0
            m = FENCE_RE.match(line[offset:])
            if not m:
                continue
            indent = offset + len(m.group("indent"))
            base = list_indent if indent >= list_indent else 0
            if indent - base > 3:
                continue
            fence = m.group("fence")
            info = m.group("info")
            if fence[0] == "`" and "`" in info:
                continue
            fence_char, fence_len = fence[0], len(fence)
            fence_indent = indent
            fence_base = base
            quote_depth = depth
            first_line = lineno
            tokens = parse_info_string(info)
            body = []
            if tokens and tokens[0] == language and NO_SYNC not in tokens[1:]:
                state = LineState.IN_CANDIDATE
            else:
                state = LineState.IN_OTHER
            continue

        depth, line = _strip_quotes(raw, quote_depth)
        if depth < quote_depth:
            # The enclosing block quote ended; so did the code block.
            # Re-scan this line from the outside state.
            if state is LineState.IN_CANDIDATE:
                yield finish()
            state = LineState.OUTSIDE
            continue

        lineno += 1
        if _is_closing_fence(line, fence_char, fence_len, fence_base):
            if state is LineState.IN_CANDIDATE:
                yield finish()
            state = LineState.OUTSIDE
        elif state is LineState.IN_CANDIDATE:
            body.append(_remove_indent(line, fence_indent))

    if state is LineState.IN_CANDIDATE:
        yield finish()
