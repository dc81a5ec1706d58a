from __future__ import annotations

import re
import sys
from typing import Any, Iterator, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from ..markdown import ManifestBlock, find_manifest_blocks
from ..report import CheckReport, Location, Match, Mismatch, Outcome
from ..utils.fs import normalize_newlines
from ..version import Version, VersionLike, coerce_version, requirement_error

DEPENDENCY_SECTIONS = ("dependencies", "dev-dependencies", "build-dependencies")

_HEADER_RE = re.compile(r"^\s*\[(?P<name>[^\[\]]+)\]\s*(?:#.*)?$")
_KEY_RE = re.compile(r"""^\s*(?P<key>"[^"]*"|'[^']*'|[A-Za-z0-9_-]+)\s*[.=]""")


def _unquote(key: str) -> str:
    key = key.strip()
    if len(key) >= 2 and key[0] == key[-1] and key[0] in "\"'":
        key = key[1:-1]
    return key.strip()


def _header_path(header: str) -> tuple[str, ...]:
    return tuple(_unquote(part) for part in header.split("."))


def locate_entry(content: str, section: str, name: str) -> Optional[int]:
    """Return the 0-based line of the `name` entry of `section` in a TOML body.

    Handles ``name = ...`` / ``name.version = ...`` under ``[section]`` and
    the sub-table form ``[section.name]``, where the ``version`` key line is
    preferred over the header itself.
    """
    current: tuple[str, ...] = ()
    subtable_line: Optional[int] = None
    for offset, line in enumerate(content.split("\n")):
        header = _HEADER_RE.match(line)
        if header:
            if subtable_line is not None:
                return subtable_line
            current = _header_path(header.group("name"))
            if current == (section, name):
                subtable_line = offset
            continue
        m = _KEY_RE.match(line)
        if not m:
            continue
        key = _unquote(m.group("key"))
        if subtable_line is not None and key == "version":
            return offset
        if current == (section,) and key == name:
            return offset
    return subtable_line


def _dependency_entries(data: dict[str, Any], name: str) -> Iterator[tuple[str, Any]]:
    for section in DEPENDENCY_SECTIONS:
        table = data.get(section)
        if not isinstance(table, dict):
            continue
        for key, value in table.items():
            if key.strip() == name:
                yield section, value


def _check_block(block: ManifestBlock, name: str, version: Version, path: str) -> list[Outcome]:
    try:
        data = tomllib.loads(block.content)
    except tomllib.TOMLDecodeError as err:
        return [Mismatch(Location(path, block.first_line), f"TOML parse error: {err}", block.content)]

    lines = block.content.split("\n")
    outcomes: list[Outcome] = []
    for section, requirement in _dependency_entries(data, name):
        offset = locate_entry(block.content, section, name)
        if offset is None:
            location = Location(path, block.first_line)
            text = block.content
        else:
            location = Location(path, block.content_line + offset)
            text = lines[offset]
        err = requirement_error(requirement, version)
        if err is None:
            outcomes.append(Match(location))
        else:
            outcomes.append(Mismatch(location, err, text))
    return outcomes


def check_markdown_deps(
    canonical: VersionLike, package_name: str, markdown_text: str, path: str = "<markdown>"
) -> CheckReport:
    """Check dependencies on `package_name` in the TOML code blocks of a Markdown text.

    Every ```` ```toml ```` block is parsed and its ``dependencies``,
    ``dev-dependencies`` and ``build-dependencies`` tables are searched for
    `package_name`. Blocks that don't mention the package are skipped, and
    blocks tagged ``toml,no_sync`` are never looked at. A block that is not
    valid TOML yields a single mismatch and the scan continues.

    Raises InputError if `canonical` is not a valid semantic version.
    """
    version = coerce_version(canonical)
    report = CheckReport(path, label="dependency errors")
    for block in find_manifest_blocks(normalize_newlines(markdown_text)):
        for outcome in _check_block(block, package_name, version, path):
            report.add(outcome)
    return report
