from dataclasses import dataclass, field
from typing import Any, List, Optional

from .component_resource_collector import ResolvedResource
from .file_system import FileSystem
from .line_mappings import LineAndCharacter
from .logger import UpdateLogger
from .target_version import TargetVersion
from .typescript.checker import TypeChecker
from .typescript.nodes import SyntaxNode
from .typescript.program import Program


@dataclass
class MigrationFailure:
    file_path: str
    message: str
    position: Optional[LineAndCharacter] = None

    def format(self) -> str:
        location = ""
        if self.position is not None:
            location = f"@{self.position.line + 1}:{self.position.character + 1}"
        return f"{self.file_path}{location} - {self.message}"


@dataclass
class PostMigrationAction:
    run_package_manager: bool = False


class Migration:
    """
    Base class of every migration.

    Subclasses override the hooks they need. ``enabled`` must be decided in
    the constructor without side effects; disabled migrations are dropped
    before the walk starts.
    """

    enabled: bool = True

    def __init__(
        self,
        program: Program,
        type_checker: TypeChecker,
        target_version: TargetVersion,
        context: Any,
        upgrade_data: Any,
        file_system: FileSystem,
        logger: UpdateLogger,
    ):
        self.program = program
        self.type_checker = type_checker
        self.target_version = target_version
        self.context = context
        self.upgrade_data = upgrade_data
        self.file_system = file_system
        self.logger = logger
        self.failures: List[MigrationFailure] = []

    def init(self) -> None:
        """Called once after construction, before any visit."""

    def visit_node(self, node: SyntaxNode) -> None:
        """Called for every node of every analyzed source file."""

    def visit_template(self, template: ResolvedResource) -> None:
        """Called for every component template."""

    def visit_stylesheet(self, stylesheet: ResolvedResource) -> None:
        """Called for every component or global stylesheet."""

    def post_analysis(self) -> None:
        """Called once after all files, templates and stylesheets were visited."""

    @classmethod
    def global_post_migration(
        cls, file_system: FileSystem, context: Any
    ) -> Optional[PostMigrationAction]:
        """Called once per workspace run, after every project was migrated."""
        return None

    def create_failure_at_node(self, node: SyntaxNode, message: str) -> None:
        source_file = node.source_file
        self.failures.append(
            MigrationFailure(
                file_path=self.file_system.resolve(source_file.file_name),
                message=message,
                position=source_file.get_line_and_character_of_position(node.start),
            )
        )
