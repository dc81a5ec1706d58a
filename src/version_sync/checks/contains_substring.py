from __future__ import annotations

from ..report import CheckReport, Location, Match, Mismatch
from ..utils.fs import normalize_newlines
from ..version import VersionLike


def check_contains_substring(
    template: str, name: str, canonical: VersionLike, file_text: str, path: str = "<text>"
) -> CheckReport:
    """Check that the text contains `template` literally.

    ``{name}`` and ``{version}`` are replaced verbatim; leaving them out of
    the template is fine. Use check_contains_regex to match a pattern.
    """
    literal = template.replace("{name}", name).replace("{version}", str(canonical))
    text = normalize_newlines(file_text)
    report = CheckReport(path, label="substring errors")

    idx = text.find(literal)
    if idx < 0:
        report.add(Mismatch(Location(path), f'could not find "{literal}"'))
    else:
        report.add(Match(Location(path, text.count("\n", 0, idx) + 1)))
    return report
