from textwrap import dedent
from typing import Dict, List, Optional, Sequence, Tuple, Type

from ngupdate.migrations import UpgradeData, parse_upgrade_data
from ngupdate.tool.fs import MemoryFileSystem
from ngupdate.tool.logger import UpdateLogger
from ngupdate.tool.migration import Migration
from ngupdate.tool.project import MigrationResult, MigrationSession, UpdateProject
from ngupdate.tool.target_version import TargetVersion
from ngupdate.tool.typescript.program import Program


class RecordingLogger:
    """UpdateLogger keeping every line per level."""

    def __init__(self):
        self.lines: Dict[str, List[str]] = {
            "debug": [],
            "info": [],
            "warn": [],
            "error": [],
        }

    def debug(self, message: str) -> None:
        self.lines["debug"].append(message)

    def info(self, message: str) -> None:
        self.lines["info"].append(message)

    def warn(self, message: str) -> None:
        self.lines["warn"].append(message)

    def error(self, message: str) -> None:
        self.lines["error"].append(message)


def create_program(
    files: Dict[str, str], root_names: Optional[Sequence[str]] = None
) -> Tuple[MemoryFileSystem, Program]:
    """
    Builds an in-memory program. Sources are dedented; by default every
    ``.ts`` file outside node_modules is a root.
    """
    fs = MemoryFileSystem({path: dedent(content) for path, content in files.items()})
    if root_names is None:
        root_names = [
            path
            for path in fs.files
            if path.endswith(".ts") and "/node_modules/" not in path
        ]
    return fs, Program(list(root_names), fs)


def run_migrations(
    files: Dict[str, str],
    migrations: Sequence[Type[Migration]],
    upgrade_data: Optional[Dict] = None,
    target: TargetVersion = TargetVersion.V9,
    additional_stylesheets: Optional[Sequence[str]] = None,
    logger: Optional[UpdateLogger] = None,
) -> Tuple[MemoryFileSystem, MigrationResult]:
    """Migrates an in-memory program and commits the edits."""
    fs, program = create_program(files)
    data: UpgradeData = parse_upgrade_data(upgrade_data or {})
    project = UpdateProject(
        None,
        program,
        fs,
        session=MigrationSession(),
        logger=logger or RecordingLogger(),
    )
    result = project.migrate(migrations, target, data, additional_stylesheets)
    fs.commit_edits()
    return fs, result
