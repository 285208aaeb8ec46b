from .component_resource_collector import (
    ComponentMetadata,
    ComponentResourceCollector,
    ResolvedResource,
    collect_program_resources,
    extract_component_metadata,
)
from .exceptions import InvalidEditError, TsconfigError, UpdateToolError
from .file_system import DirectoryEntry, FileSystem, UpdateRecorder
from .line_mappings import (
    LineAndCharacter,
    compute_line_starts_map,
    get_line_and_character_from_position,
)
from .logger import UpdateLogger, default_logger
from .migration import Migration, MigrationFailure, PostMigrationAction
from .project import MigrationResult, MigrationSession, UpdateProject
from .target_version import TargetVersion
from .version_changes import (
    VersionChanges,
    VersionChangesEntry,
    get_all_changes,
    get_changes_for_target,
)

__all__ = [
    "ComponentMetadata",
    "ComponentResourceCollector",
    "ResolvedResource",
    "collect_program_resources",
    "extract_component_metadata",
    "InvalidEditError",
    "TsconfigError",
    "UpdateToolError",
    "DirectoryEntry",
    "FileSystem",
    "UpdateRecorder",
    "LineAndCharacter",
    "compute_line_starts_map",
    "get_line_and_character_from_position",
    "UpdateLogger",
    "default_logger",
    "Migration",
    "MigrationFailure",
    "PostMigrationAction",
    "MigrationResult",
    "MigrationSession",
    "UpdateProject",
    "TargetVersion",
    "VersionChanges",
    "VersionChangesEntry",
    "get_all_changes",
    "get_changes_for_target",
]
