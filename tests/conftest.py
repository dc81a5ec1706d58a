from __future__ import annotations

from pathlib import Path

import pytest

PYPROJECT = """\
[project]
name = "foo"
version = "1.2.3"

[tool.version-sync]
markdown-deps = ["README.md"]
contains-regex = [
    { path = "CHANGELOG.md", template = "^## Version {version}$" },
]
"""

README = """\
# foo

```toml
[dependencies]
foo = "1.2"
```
"""

CHANGELOG = """\
# Changelog

## Version 1.2.3
"""


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A small project with a passing configuration, used as the cwd."""
    (tmp_path / "pyproject.toml").write_text(PYPROJECT, encoding="utf-8")
    (tmp_path / "README.md").write_text(README, encoding="utf-8")
    (tmp_path / "CHANGELOG.md").write_text(CHANGELOG, encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path
