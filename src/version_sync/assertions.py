"""
Helpers for calling checks from a test suite.

    def test_readme_deps():
        version_sync.assert_markdown_deps_updated("README.md")

The package name and version default to the ones declared in the nearest
pyproject.toml or Cargo.toml above the current directory. A failed check
raises CheckFailed, an AssertionError carrying the rendered report.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import load_project
from .report import CheckReport
from .runner import run_check
from .version import VersionLike


def _assert(
    kind: str,
    path: str | Path,
    template: Optional[str],
    name: Optional[str],
    version: Optional[VersionLike],
) -> CheckReport:
    if name is None or version is None:
        project = load_project()
        name = project.name if name is None else name
        version = project.version if version is None else version
    report = run_check(kind, path, name, version, template)
    report.raise_on_failure()
    return report


def assert_markdown_deps_updated(path, *, name=None, version=None) -> CheckReport:
    return _assert("markdown-deps", path, None, name, version)


def assert_html_root_url_updated(path, *, name=None, version=None) -> CheckReport:
    return _assert("html-root-url", path, None, name, version)


def assert_contains_regex(path, template: str, *, name=None, version=None) -> CheckReport:
    return _assert("contains-regex", path, template, name, version)


def assert_only_contains_regex(path, template: str, *, name=None, version=None) -> CheckReport:
    return _assert("only-contains-regex", path, template, name, version)


def assert_contains_substring(path, template: str, *, name=None, version=None) -> CheckReport:
    return _assert("contains-substring", path, template, name, version)
