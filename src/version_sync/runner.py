from __future__ import annotations

from pathlib import Path
from typing import Optional

from .checks import (
    check_contains_regex,
    check_contains_substring,
    check_html_root_url,
    check_markdown_deps,
    check_only_contains_regex,
)
from .config import CHECK_KINDS, TEMPLATE_KINDS, CheckSpec
from .errors import InputError
from .report import CheckReport
from .utils.fs import read_file
from .version import Version, VersionLike, coerce_version


def run_check(
    kind: str,
    path: str | Path,
    name: str,
    version: VersionLike,
    template: Optional[str] = None,
) -> CheckReport:
    """Read `path` and run the check named `kind` against its contents."""
    if kind not in CHECK_KINDS:
        raise InputError(f"unknown check {kind!r}")
    if kind in TEMPLATE_KINDS and template is None:
        raise InputError(f"{kind} needs a template")

    # Validate the version before touching the file.
    if kind in ("markdown-deps", "html-root-url") and not isinstance(version, Version):
        version = coerce_version(version)

    label = str(path)
    text = read_file(path)

    if kind == "markdown-deps":
        return check_markdown_deps(version, name, text, path=label)
    if kind == "html-root-url":
        return check_html_root_url(version, name, text, path=label)
    if kind == "contains-regex":
        return check_contains_regex(template, name, version, text, path=label)
    if kind == "only-contains-regex":
        return check_only_contains_regex(template, name, version, text, path=label)
    return check_contains_substring(template, name, version, text, path=label)


def run_spec(spec: CheckSpec, name: str, version: VersionLike) -> CheckReport:
    return run_check(spec.kind, spec.path, name, version, spec.template)
