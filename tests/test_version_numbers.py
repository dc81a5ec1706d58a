"""This project's own version numbers must agree with pyproject.toml."""

from __future__ import annotations

import runpy
import sys
from pathlib import Path

import pytest

import version_sync
from version_sync.config import load_project
from version_sync.runner import run_spec

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def info():
    return load_project(ROOT)


def test_package_version(info):
    assert version_sync.__version__ == info.version


def test_readme_deps(info):
    version_sync.assert_markdown_deps_updated(ROOT / "README.md", name=info.name, version=info.version)


def test_readme_changelog(info):
    version_sync.assert_contains_regex(
        ROOT / "README.md", r"^### Version {version} \(20\d\d-\d\d-\d\d\)$", name=info.name, version=info.version
    )


def test_configured_checks(info):
    assert info.checks
    for spec in info.checks:
        run_spec(spec, info.name, info.version).raise_on_failure()


def test_self_check_script(info, capsys):
    path_before = list(sys.path)
    runpy.run_path(str(ROOT / "scripts" / "check_version_sync.py"), run_name="__main__")
    assert capsys.readouterr().out == f"Version OK: {info.version}\n"
    assert sys.path == path_before


def test_sources_have_no_typographic_dashes():
    for path in sorted((ROOT / "src").rglob("*.py")):
        text = path.read_text(encoding="utf-8")
        assert "\u2013" not in text and "\u2014" not in text, path
