"""
version-sync keeps the version numbers in READMEs, changelogs and doc
attributes in sync with the version of the package.
"""

from .assertions import (
    assert_contains_regex,
    assert_contains_substring,
    assert_html_root_url_updated,
    assert_markdown_deps_updated,
    assert_only_contains_regex,
)
from .checks import (
    check_contains_regex,
    check_contains_substring,
    check_html_root_url,
    check_markdown_deps,
    check_only_contains_regex,
)
from .errors import CheckFailed, FormatError, InputError, VersionSyncError
from .report import CheckReport, Location, Match, Mismatch
from .runner import run_check
from .version import Requirement, Version, matches

__version__ = "0.1.0"

__all__ = [
    "CheckFailed",
    "CheckReport",
    "FormatError",
    "InputError",
    "Location",
    "Match",
    "Mismatch",
    "Requirement",
    "Version",
    "VersionSyncError",
    "assert_contains_regex",
    "assert_contains_substring",
    "assert_html_root_url_updated",
    "assert_markdown_deps_updated",
    "assert_only_contains_regex",
    "check_contains_regex",
    "check_contains_substring",
    "check_html_root_url",
    "check_markdown_deps",
    "check_only_contains_regex",
    "matches",
    "run_check",
]
