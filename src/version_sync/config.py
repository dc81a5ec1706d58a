"""
Project manifest discovery and the ``[tool.version-sync]`` check list.

The canonical name and version come from the nearest ``pyproject.toml``
(``[project]``) or ``Cargo.toml`` (``[package]``). The checks to run are
listed under ``[tool.version-sync]`` in pyproject.toml, or under
``[package.metadata.version-sync]`` in Cargo.toml::

    [tool.version-sync]
    markdown-deps = ["README.md"]
    contains-regex = [
        { path = "CHANGELOG.md", template = "^## Version {version}" },
    ]
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .errors import InputError
from .utils.fs import find_upwards

MANIFEST_NAMES = ("pyproject.toml", "Cargo.toml")

CHECK_KINDS = (
    "markdown-deps",
    "html-root-url",
    "contains-regex",
    "only-contains-regex",
    "contains-substring",
)
TEMPLATE_KINDS = ("contains-regex", "only-contains-regex", "contains-substring")


@dataclass(frozen=True)
class CheckSpec:
    kind: str
    path: Path
    template: Optional[str] = None


@dataclass
class ProjectInfo:
    name: str
    version: str
    manifest: Path
    checks: list[CheckSpec] = field(default_factory=list)

    @property
    def root(self) -> Path:
        return self.manifest.parent


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except OSError as err:
        raise InputError(f"could not read {path}: {err.strerror or err}") from err
    except tomllib.TOMLDecodeError as err:
        raise InputError(f"could not parse {path}: {err}") from err


def _project_table(manifest: Path, data: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Return the (metadata, version-sync config) tables for a manifest."""
    if manifest.name == "Cargo.toml":
        package = data.get("package") or {}
        tool = (package.get("metadata") or {}).get("version-sync") or {}
        return package, tool
    project = data.get("project") or {}
    tool = (data.get("tool") or {}).get("version-sync") or {}
    return project, tool


def parse_checks(table: dict[str, Any], root: Path) -> list[CheckSpec]:
    checks: list[CheckSpec] = []
    for kind, entries in table.items():
        if kind not in CHECK_KINDS:
            raise InputError(f"unknown check {kind!r}, expected one of: {', '.join(CHECK_KINDS)}")
        if not isinstance(entries, list):
            entries = [entries]
        for entry in entries:
            if isinstance(entry, str):
                path, template = entry, None
            elif isinstance(entry, dict) and isinstance(entry.get("path"), str):
                path, template = entry["path"], entry.get("template")
            else:
                raise InputError(f"invalid {kind} entry: {entry!r}")
            if kind in TEMPLATE_KINDS and not isinstance(template, str):
                raise InputError(f"{kind} entry for {path} needs a template")
            checks.append(CheckSpec(kind, root / path, template))
    return checks


def load_project(start: Optional[Path] = None) -> ProjectInfo:
    """Find the nearest project manifest above `start` and read it."""
    start = start or Path.cwd()
    manifest = find_upwards(start, MANIFEST_NAMES)
    if manifest is None:
        raise InputError(f"no {' or '.join(MANIFEST_NAMES)} found above {start}")

    meta, tool = _project_table(manifest, _load_toml(manifest))
    name = meta.get("name")
    version = meta.get("version")
    if not isinstance(name, str):
        raise InputError(f"{manifest} declares no package name")
    if not isinstance(version, str):
        if "version" in (meta.get("dynamic") or []):
            raise InputError(f"{manifest} declares a dynamic version, pass the version explicitly")
        raise InputError(f"{manifest} declares no package version")

    return ProjectInfo(name, version, manifest, parse_checks(tool, manifest.parent))
