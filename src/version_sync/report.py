from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union

from .errors import CheckFailed
from .utils.fs import indent


@dataclass(frozen=True)
class Location:
    path: str
    line: Optional[int] = None

    def __str__(self) -> str:
        if self.line is None:
            return self.path
        return f"{self.path} (line {self.line})"


@dataclass(frozen=True)
class Match:
    location: Location
    ok: ClassVar[bool] = True

    def render(self) -> str:
        return f"{self.location} ... ok"


@dataclass(frozen=True)
class Mismatch:
    """An embedded version (or the lack of one) that disagrees with canonical."""

    location: Location
    reason: str
    text: str = ""
    ok: ClassVar[bool] = False

    def render(self) -> str:
        if not self.text:
            return f"{self.location} ... {self.reason}"
        return f"{self.location} ... {self.reason} in\n{indent(self.text)}"


Outcome = Union[Match, Mismatch]


@dataclass
class CheckReport:
    """Ordered outcomes of one check against one file."""

    path: str
    label: str = "version errors"
    outcomes: list[Outcome] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(outcome.ok for outcome in self.outcomes)

    @property
    def mismatches(self) -> list[Mismatch]:
        return [o for o in self.outcomes if isinstance(o, Mismatch)]

    def add(self, outcome: Outcome) -> None:
        self.outcomes.append(outcome)

    def render(self, verbose: bool = False) -> str:
        """Render one line per outcome; passing lines only when verbose."""
        return "\n".join(o.render() for o in self.outcomes if verbose or not o.ok)

    def summary(self) -> str:
        if self.ok:
            return f"{self.path} ... ok"
        return f"{self.label} in {self.path}"

    def raise_on_failure(self) -> None:
        if not self.ok:
            raise CheckFailed(f"{self.summary()}\n{self.render()}", self)
