"""
Version model and the matching policy used by every check.

A requirement "matches" the canonical version when it names the same
major.minor pair. Patch numbers, pre-release and build metadata never
take part in the comparison, and operators are stripped, not evaluated.
This is deliberately coarse: it is not a range solver.

Wildcard parts (``1.*``, ``1.2.*``, ``1.x``) count as absent. Requirements
that only state an upper bound (``<2.0``, ``<= 1.4``) and comma-separated
ranges (``>=1.2, <2``) are parsed for well-formedness but say nothing
about the major.minor pair, so they always pass.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

from .errors import FormatError, InputError

_IDENT = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"

SEMVER_RE = re.compile(
    r"^(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    rf"(?:-(?P<pre>{_IDENT}))?"
    rf"(?:\+(?P<build>{_IDENT}))?$"
)

REQUIREMENT_RE = re.compile(
    r"^\s*(?P<op>>=|<=|>|<|=|\^|~)?\s*"
    r"(?P<major>\d+)"
    r"(?:\.(?P<minor>\d+|[*xX])"
    r"(?:\.(?P<patch>\d+|[*xX])"
    rf"(?:-{_IDENT})?(?:\+{_IDENT})?"
    r")?)?\s*$"
)

# Operators whose requirement does not pin a major.minor pair.
UNCHECKED_OPS = ("<", "<=", ",")


@dataclass(frozen=True)
class Version:
    """An immutable semantic version, the ground truth for one check."""

    major: int
    minor: int
    patch: int
    pre: Tuple[str, ...] = ()
    build: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str) -> "Version":
        m = SEMVER_RE.match(text.strip())
        if not m:
            raise InputError(f'bad package version "{text}": expected MAJOR.MINOR.PATCH')
        pre = tuple(m.group("pre").split(".")) if m.group("pre") else ()
        build = tuple(m.group("build").split(".")) if m.group("build") else ()
        return cls(int(m.group("major")), int(m.group("minor")), int(m.group("patch")), pre, build)

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre:
            text += "-" + ".".join(self.pre)
        if self.build:
            text += "+" + ".".join(self.build)
        return text


VersionLike = Union[Version, str]


def coerce_version(version: VersionLike) -> Version:
    if isinstance(version, Version):
        return version
    return Version.parse(version)


def _part(text: Optional[str]) -> Optional[int]:
    if text is None or not text.isdigit():
        return None
    return int(text)


@dataclass(frozen=True)
class Requirement:
    """A requirement string as written in a dependency table or URL.

    ``op`` is ``"*"`` for a bare wildcard and ``","`` for a comma-separated
    range; ``major`` is None in both cases.
    """

    raw: str
    op: str
    major: Optional[int]
    minor: Optional[int] = None
    patch: Optional[int] = None

    @property
    def is_wildcard(self) -> bool:
        return self.op == "*"

    @property
    def is_checkable(self) -> bool:
        return self.major is not None and self.op not in UNCHECKED_OPS

    @classmethod
    def parse(cls, raw: str) -> "Requirement":
        if raw.strip() == "*":
            return cls(raw, "*", None)
        if "," in raw:
            for part in raw.split(","):
                if part.strip() != "*" and not REQUIREMENT_RE.match(part):
                    raise FormatError(f'could not parse requirement "{raw}"')
            return cls(raw, ",", None)
        m = REQUIREMENT_RE.match(raw)
        if not m:
            raise FormatError(f'could not parse requirement "{raw}"')
        return cls(
            raw=raw,
            op=m.group("op") or "",
            major=int(m.group("major")),
            minor=_part(m.group("minor")),
            patch=_part(m.group("patch")),
        )


def requirement_error(requirement: Any, canonical: Version) -> Optional[str]:
    """Return why `requirement` does not match `canonical`, or None if it does.

    `requirement` is either a requirement string or a dependency mapping
    (``{ version = "1.2" }``, ``{ git = "..." }``). A mapping without a
    version field is never flagged. Malformed requirements come back as a
    message echoing the raw text instead of raising.
    """
    if isinstance(requirement, Mapping):
        if "version" not in requirement:
            return None
        requirement = requirement["version"]
    if not isinstance(requirement, str):
        return f'could not parse requirement "{requirement}"'

    try:
        req = Requirement.parse(requirement)
    except FormatError as err:
        return str(err)

    if not req.is_checkable:
        return None
    if req.major != canonical.major:
        return f"expected major version {canonical.major}, found {req.major}"
    if req.minor is not None and req.minor != canonical.minor:
        return f"expected minor version {canonical.minor}, found {req.minor}"
    return None


def matches(requirement: Any, canonical: VersionLike) -> bool:
    return requirement_error(requirement, coerce_version(canonical)) is None
