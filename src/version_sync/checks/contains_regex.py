from __future__ import annotations

import re

from ..errors import InputError
from ..report import CheckReport, Location, Match, Mismatch
from ..utils.fs import normalize_newlines
from ..version import VersionLike

# A version-shaped token: at least major.minor, optionally patch,
# pre-release and build metadata.
VERSION_TOKEN_RE = re.compile(
    r"(?<![\d.])\d+\.\d+(?:\.\d+)?"
    r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r"(?!\.?\d)"
)


def expand_template(template: str, name: str, version: VersionLike) -> str:
    """Substitute the escaped `name` and `version` into `template`."""
    return template.replace("{name}", re.escape(name)).replace("{version}", re.escape(str(version)))


def compile_template(template: str, name: str, version: VersionLike) -> re.Pattern[str]:
    pattern = expand_template(template, name, version)
    try:
        return re.compile(pattern, re.MULTILINE)
    except re.error as err:
        raise InputError(f"could not parse template: {err}") from err


def _line_of(text: str, index: int) -> int:
    return text.count("\n", 0, index) + 1


def check_contains_regex(
    template: str, name: str, canonical: VersionLike, file_text: str, path: str = "<text>"
) -> CheckReport:
    """Check that the text contains a match for `template`.

    The placeholders ``{name}`` and ``{version}`` are replaced by the
    regex-escaped package name and version. The pattern is compiled in
    multi-line mode, so ``^`` and ``$`` anchor at every line.
    """
    regex = compile_template(template, name, canonical)
    text = normalize_newlines(file_text)
    report = CheckReport(path, label="regex errors")

    m = regex.search(text)
    if m is None:
        report.add(Mismatch(Location(path), f'no matching line found for "{regex.pattern}"'))
    else:
        report.add(Match(Location(path, _line_of(text, m.start()))))
    return report


def check_only_contains_regex(
    template: str, name: str, canonical: VersionLike, file_text: str, path: str = "<text>"
) -> CheckReport:
    """Check that every version mentioned in the text matches `template`.

    Besides requiring at least one match like check_contains_regex, each
    line holding a version-shaped token must itself match the compiled
    template. Lines that don't are reported with their content, which
    catches stale version numbers left elsewhere in the file.
    """
    regex = compile_template(template, name, canonical)
    text = normalize_newlines(file_text)
    report = CheckReport(path, label="regex errors")

    has_match = regex.search(text) is not None
    for lineno, line in enumerate(text.split("\n"), start=1):
        token = VERSION_TOKEN_RE.search(line)
        if token is None:
            continue
        location = Location(path, lineno)
        if regex.search(line):
            report.add(Match(location))
        else:
            report.add(Mismatch(location, f'found "{token.group(0)}", which does not match "{regex.pattern}"', line))

    if not has_match:
        report.add(Mismatch(Location(path), f'no matching line found for "{regex.pattern}"'))
    return report
