import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Set, Type

from .component_resource_collector import ComponentResourceCollector
from .file_system import FileSystem
from .logger import UpdateLogger, default_logger
from .migration import Migration, MigrationFailure
from .target_version import TargetVersion
from .typescript.nodes import SyntaxNode
from .typescript.program import Program
from .typescript.tsconfig import parse_tsconfig_file

log = logging.getLogger(__name__)

HOOKS = ("visit_node", "visit_template", "visit_stylesheet", "post_analysis")


@dataclass
class MigrationSession:
    """State shared by every UpdateProject of one workspace run."""

    analyzed_files: Set[str] = field(default_factory=set)


@dataclass
class MigrationResult:
    has_failures: bool
    failures: List[MigrationFailure] = field(default_factory=list)


def _overrides(migration: Migration, hook: str) -> bool:
    return getattr(type(migration), hook) is not getattr(Migration, hook)


class UpdateProject:
    """
    Runs a set of migrations over one TypeScript program: a single walk over
    every first-party source file, then the discovered templates and
    stylesheets, then post analysis.
    """

    def __init__(
        self,
        context: Any,
        program: Program,
        file_system: FileSystem,
        session: Optional[MigrationSession] = None,
        logger: UpdateLogger = default_logger,
    ):
        self._context = context
        self._program = program
        self._file_system = file_system
        self._session = session if session is not None else MigrationSession()
        self._logger = logger
        self._type_checker = program.get_type_checker()

    @property
    def analyzed_files(self) -> Set[str]:
        return self._session.analyzed_files

    def migrate(
        self,
        migration_types: Sequence[Type[Migration]],
        target_version: TargetVersion,
        upgrade_data: Any,
        additional_stylesheet_paths: Optional[Sequence[str]] = None,
    ) -> MigrationResult:
        # 1. Instantiate migrations and keep the enabled ones
        migrations: List[Migration] = []
        for migration_type in migration_types:
            migration = migration_type(
                self._program,
                self._type_checker,
                target_version,
                self._context,
                upgrade_data,
                self._file_system,
                self._logger,
            )
            migration.init()
            if migration.enabled:
                migrations.append(migration)
            else:
                log.debug(f"Migration {migration_type.__name__} is disabled")

        dispatch: Dict[str, List[Migration]] = {
            hook: [m for m in migrations if _overrides(m, hook)] for hook in HOOKS
        }
        collector = ComponentResourceCollector(self._type_checker, self._file_system)
        analyzed = self._session.analyzed_files

        # 2. Walk every first-party source file exactly once
        for source_file in self._program.get_source_files():
            if source_file.is_declaration_file:
                continue
            if self._program.is_source_file_from_external_library(source_file):
                continue
            file_path = self._file_system.resolve(source_file.file_name)
            if file_path in analyzed:
                continue
            self._walk(source_file.root, dispatch["visit_node"], collector)
            analyzed.add(file_path)

        # 3. Templates; inline ones cannot be shared so they always run
        for template in collector.resolved_templates:
            if template.inline or template.file_path not in analyzed:
                for migration in dispatch["visit_template"]:
                    migration.visit_template(template)
                analyzed.add(template.file_path)

        # 4. Component stylesheets
        for stylesheet in collector.resolved_stylesheets:
            if stylesheet.inline or stylesheet.file_path not in analyzed:
                for migration in dispatch["visit_stylesheet"]:
                    migration.visit_stylesheet(stylesheet)
                analyzed.add(stylesheet.file_path)

        # 5. Global stylesheets not referenced by any component
        for path in additional_stylesheet_paths or []:
            resolved_path = self._file_system.resolve(path)
            stylesheet = collector.resolve_external_stylesheet(resolved_path, None)
            if stylesheet is not None and resolved_path not in analyzed:
                for migration in dispatch["visit_stylesheet"]:
                    migration.visit_stylesheet(stylesheet)
                analyzed.add(resolved_path)

        # 6. Post analysis
        for migration in dispatch["post_analysis"]:
            migration.post_analysis()

        # 7. Report failures in registration order
        failures = [failure for m in migrations for failure in m.failures]
        for failure in failures:
            self._logger.warn(failure.format())

        return MigrationResult(has_failures=bool(failures), failures=failures)

    @staticmethod
    def _walk(
        root: SyntaxNode,
        visitors: List[Migration],
        collector: ComponentResourceCollector,
    ) -> None:
        # Migrations see a node before its children; the collector after.
        stack = [(root, False)]
        while stack:
            node, exiting = stack.pop()
            if exiting:
                collector.visit_node(node)
                continue
            for migration in visitors:
                migration.visit_node(node)
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(node.children))

    @staticmethod
    def create_program_from_tsconfig(tsconfig_path: str, fs: FileSystem) -> Program:
        parsed = parse_tsconfig_file(tsconfig_path, fs)
        return Program(parsed.file_names, fs, parsed.options)
