from .bus import SpyBus
from .helpers import RecordingLogger, create_program, run_migrations
from .workspace import WorkspaceFactory

__all__ = [
    "SpyBus",
    "RecordingLogger",
    "create_program",
    "run_migrations",
    "WorkspaceFactory",
]
