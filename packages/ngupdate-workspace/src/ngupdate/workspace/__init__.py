__path__ = __import__("pkgutil").extend_path(__path__, __name__)

from .exceptions import WorkspaceError, WorkspaceNotFoundError
from .runner import RunSummary, UpdateContext, WorkspaceUpdateRunner
from .stylesheets import DEFAULT_STYLESHEET_EXTENSIONS, find_stylesheet_files
from .workspace import (
    AngularWorkspace,
    WorkspaceProject,
    WorkspaceTarget,
    get_target_tsconfig_path,
)

__all__ = [
    "WorkspaceError",
    "WorkspaceNotFoundError",
    "RunSummary",
    "UpdateContext",
    "WorkspaceUpdateRunner",
    "DEFAULT_STYLESHEET_EXTENSIONS",
    "find_stylesheet_files",
    "AngularWorkspace",
    "WorkspaceProject",
    "WorkspaceTarget",
    "get_target_tsconfig_path",
]
