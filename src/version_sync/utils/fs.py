from __future__ import annotations

from pathlib import Path

from ..errors import InputError


def normalize_newlines(text: str) -> str:
    """Turn "\r\n" into "\n" so "^" and "$" behave the same on every platform."""
    return text.replace("\r\n", "\n")


def read_file(path: str | Path) -> str:
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as err:
        raise InputError(f"could not read {path}: {err.strerror or err}") from err
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as err:
        raise InputError(f"could not read {path}: {err}") from err
    return normalize_newlines(text)


def indent(text: str, prefix: str = "    ") -> str:
    """Indent every line in text by four spaces."""
    return "\n".join(prefix + line for line in text.splitlines())


def find_upwards(start: Path, names: tuple[str, ...]) -> Path | None:
    """Return the first file named in `names` found in start or its parents."""
    start = start.resolve()
    if start.is_file():
        start = start.parent
    for directory in (start, *start.parents):
        for name in names:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None
