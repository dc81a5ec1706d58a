from __future__ import annotations

import re
from typing import Iterator, Optional
from urllib.parse import urlsplit

from ..report import CheckReport, Location, Match, Mismatch
from ..utils.fs import normalize_newlines
from ..version import Version, VersionLike, coerce_version, requirement_error

DOCS_HOST = "docs.rs"

# Inner doc attribute: #![doc(...)]
ATTRIBUTE_RE = re.compile(r"#!\[\s*doc\s*\((?P<body>.*?)\)\s*\]", re.DOTALL)
ROOT_URL_RE = re.compile(r"\bhtml_root_url\b(?:\s*=\s*\"(?P<url>[^\"]*)\")?")
RAW_STRING_RE = re.compile(r"(?<!\w)b?r(?P<hashes>#*)\"")
CHAR_RE = re.compile(r"'(?:[^'\\\n]|\\(?:x[0-9a-fA-F]{2}|u\{[0-9a-fA-F]{1,6}\}|.))'")


def url_error(value: str, crate_name: str, version: Version) -> Optional[str]:
    """Return why the documentation URL does not fit `crate_name`/`version`."""
    url = urlsplit(value)
    if not url.scheme:
        return "parse error: relative URL without a base"

    # Only docs.rs URLs can be reasoned about.
    if url.hostname and url.hostname != DOCS_HOST:
        return None

    if url.scheme != "https":
        return f'expected "https", found "{url.scheme}"'

    segments = url.path.split("/")[1:] if url.path.startswith("/") else url.path.split("/")
    name = segments[0] if segments else ""
    if not name:
        return "missing package name"
    request = segments[1] if len(segments) > 1 else ""
    if not request:
        return "missing version number"

    if name != crate_name:
        return f'expected package "{crate_name}", found "{name}"'
    return requirement_error(request, version)


def _skip_block_comment(text: str, pos: int) -> int:
    # Rust block comments nest.
    depth = 0
    while pos < len(text):
        if text.startswith("/*", pos):
            depth += 1
            pos += 2
        elif text.startswith("*/", pos):
            depth -= 1
            pos += 2
            if depth == 0:
                return pos
        else:
            pos += 1
    return pos


def _skip_string(text: str, pos: int) -> int:
    """Return the index just past the string literal whose body starts at `pos`."""
    while pos < len(text):
        if text[pos] == "\\":
            pos += 2
        elif text[pos] == '"':
            return pos + 1
        else:
            pos += 1
    return pos


def code_attributes(text: str) -> Iterator[re.Match]:
    """Yield the ``#![doc(...)]`` attributes of Rust source that are in code.

    Line and block comments, string, raw string and character literals are
    skipped, so a commented-out attribute is never mistaken for the real one.
    """
    pos = 0
    end = len(text)
    while pos < end:
        if text.startswith("//", pos):
            newline = text.find("\n", pos)
            pos = end if newline < 0 else newline
            continue
        if text.startswith("/*", pos):
            pos = _skip_block_comment(text, pos)
            continue
        raw = RAW_STRING_RE.match(text, pos)
        if raw:
            closing = '"' + raw.group("hashes")
            close = text.find(closing, raw.end())
            pos = end if close < 0 else close + len(closing)
            continue
        char = text[pos]
        if char == '"':
            pos = _skip_string(text, pos + 1)
            continue
        if char == "'":
            literal = CHAR_RE.match(text, pos)
            pos = literal.end() if literal else pos + 1
            continue
        if text.startswith("#![", pos):
            attr = ATTRIBUTE_RE.match(text, pos)
            if attr:
                yield attr
                pos = attr.end()
                continue
        pos += 1


def check_html_root_url(
    canonical: VersionLike, crate_name: str, source_text: str, path: str = "<source>"
) -> CheckReport:
    """Check the version in the ``html_root_url`` doc attribute of a source file.

    Only the first ``#![doc(html_root_url = "...")]`` attribute is checked.
    A file without one passes: there is nothing to be out of date.
    Attributes inside comments or string literals are not considered.
    """
    version = coerce_version(canonical)
    text = normalize_newlines(source_text)
    report = CheckReport(path, label="html_root_url errors")

    for attr in code_attributes(text):
        root = ROOT_URL_RE.search(attr.group("body"))
        if root is None:
            continue

        first_line = text.count("\n", 0, attr.start()) + 1
        last_line = first_line + attr.group(0).count("\n")
        source = "\n".join(text.split("\n")[first_line - 1:last_line])
        location = Location(path, first_line)

        url = root.group("url")
        if url is None:
            err = "html_root_url attribute without URL"
        else:
            err = url_error(url, crate_name, version)
        if err is None:
            report.add(Match(location))
        else:
            report.add(Mismatch(location, err, source))
        break

    return report
