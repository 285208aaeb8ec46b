import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Type

from ngupdate.common import L, bus
from ngupdate.tool.file_system import FileSystem
from ngupdate.tool.logger import UpdateLogger, default_logger
from ngupdate.tool.migration import Migration, MigrationFailure
from ngupdate.tool.project import MigrationSession, UpdateProject
from ngupdate.tool.target_version import TargetVersion

from .exceptions import WorkspaceNotFoundError
from .stylesheets import DEFAULT_STYLESHEET_EXTENSIONS, find_stylesheet_files
from .workspace import AngularWorkspace, WorkspaceProject, get_target_tsconfig_path

log = logging.getLogger(__name__)


@dataclass
class UpdateContext:
    """Handed to every migration as its ``context``."""

    project_name: str
    project: WorkspaceProject
    is_test_target: bool
    file_system: FileSystem
    workspace: Optional[AngularWorkspace] = None


@dataclass
class RunSummary:
    has_failures: bool = False
    run_package_manager: bool = False
    projects_migrated: List[str] = field(default_factory=list)
    projects_skipped: List[str] = field(default_factory=list)
    failures: List[MigrationFailure] = field(default_factory=list)
    changed_files: List[str] = field(default_factory=list)


class WorkspaceUpdateRunner:
    """
    Migrates every project of an Angular workspace: the build program first,
    then the test program. Files analyzed once are not analyzed again, even
    across projects.
    """

    def __init__(
        self,
        file_system: FileSystem,
        target_version: TargetVersion,
        upgrade_data: object,
        migrations: Sequence[Type[Migration]],
        project_names: Optional[Iterable[str]] = None,
        stylesheet_extensions: Sequence[str] = DEFAULT_STYLESHEET_EXTENSIONS,
        logger: UpdateLogger = default_logger,
    ):
        self.file_system = file_system
        self.target_version = target_version
        self.upgrade_data = upgrade_data
        self.migrations = list(migrations)
        self.project_names = list(project_names) if project_names else None
        self.stylesheet_extensions = tuple(stylesheet_extensions)
        self.logger = logger

    def _select_projects(self, workspace: AngularWorkspace) -> List[WorkspaceProject]:
        if self.project_names is None:
            return list(workspace.projects.values())
        selected = []
        for name in self.project_names:
            project = workspace.get_project(name)
            if project is None:
                bus.warning(L.update.project.unknown, project=name)
                continue
            selected.append(project)
        return selected

    def run(self) -> RunSummary:
        fs = self.file_system

        # 1. Read the workspace configuration
        workspace = AngularWorkspace.load(fs)
        if workspace is None:
            raise WorkspaceNotFoundError(fs.resolve("/"))

        summary = RunSummary()
        session = MigrationSession()
        bus.info(
            L.update.run.start,
            version=self.target_version.major,
            count=len(self.migrations),
        )

        # 2. Migrate each project through its build and test programs
        for project in self._select_projects(workspace):
            build_tsconfig = get_target_tsconfig_path(fs, project, "build")
            test_tsconfig = get_target_tsconfig_path(fs, project, "test")
            tsconfig_paths = [
                (path, is_test)
                for path, is_test in ((build_tsconfig, False), (test_tsconfig, True))
                if path is not None and fs.is_file(path)
            ]

            if not tsconfig_paths:
                self.logger.warn(
                    bus.format(L.update.project.no_tsconfig, project=project.name)
                )
                summary.projects_skipped.append(project.name)
                continue

            bus.info(L.update.project.start, project=project.name)
            stylesheets = find_stylesheet_files(
                fs, fs.resolve(project.root), self.stylesheet_extensions
            )
            bus.debug(
                L.debug.log.global_stylesheets,
                project=project.name,
                count=len(stylesheets),
            )

            for tsconfig_path, is_test_target in tsconfig_paths:
                bus.debug(L.debug.log.tsconfig, path=tsconfig_path)
                program = UpdateProject.create_program_from_tsconfig(tsconfig_path, fs)
                context = UpdateContext(
                    project_name=project.name,
                    project=project,
                    is_test_target=is_test_target,
                    file_system=fs,
                    workspace=workspace,
                )
                update_project = UpdateProject(
                    context, program, fs, session=session, logger=self.logger
                )
                result = update_project.migrate(
                    self.migrations,
                    self.target_version,
                    self.upgrade_data,
                    stylesheets,
                )
                for line in fs.preview():
                    log.debug(line)
                # Edits must land before the next program reads the files.
                for path in fs.commit_edits():
                    if path not in summary.changed_files:
                        summary.changed_files.append(path)
                summary.failures.extend(result.failures)
                summary.has_failures = summary.has_failures or result.has_failures

            summary.projects_migrated.append(project.name)

        # 3. Workspace-wide hooks of every migration class
        global_context = UpdateContext(
            project_name="",
            project=WorkspaceProject(name=""),
            is_test_target=False,
            file_system=fs,
            workspace=workspace,
        )
        for migration_type in self.migrations:
            action = migration_type.global_post_migration(fs, global_context)
            if action is not None and action.run_package_manager:
                summary.run_package_manager = True

        log.debug(
            f"Run finished: {len(summary.projects_migrated)} migrated, "
            f"{len(summary.projects_skipped)} skipped"
        )
        return summary
