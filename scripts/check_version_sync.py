import pathlib
import sys

from version_sync.config import load_project
from version_sync.errors import VersionSyncError
from version_sync.runner import run_spec

root = pathlib.Path(__file__).resolve().parents[1]

try:
    project = load_project(root)
    reports = [run_spec(spec, project.name, project.version) for spec in project.checks]
except VersionSyncError as err:
    print(err)
    sys.exit(1)

failed = [r for r in reports if not r.ok]
for report in failed:
    print(report.summary())
    print(report.render())
if failed:
    sys.exit(2)

print(f"Version OK: {project.version}")
