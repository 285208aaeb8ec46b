import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ngupdate.tool.file_system import FileSystem
from ngupdate.tool.utils import jsonc

log = logging.getLogger(__name__)

WORKSPACE_CONFIG_PATHS = ("/angular.json", "/.angular.json")


@dataclass
class WorkspaceTarget:
    name: str
    builder: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict)
    configurations: Dict[str, Any] = field(default_factory=dict)


@dataclass
class WorkspaceProject:
    name: str
    root: str = ""
    source_root: Optional[str] = None
    project_type: Optional[str] = None
    targets: Dict[str, WorkspaceTarget] = field(default_factory=dict)


@dataclass
class AngularWorkspace:
    config_path: str
    projects: Dict[str, WorkspaceProject] = field(default_factory=dict)

    @classmethod
    def load(cls, fs: FileSystem) -> Optional["AngularWorkspace"]:
        """
        Reads the workspace configuration. Returns None when no configuration
        file exists or it cannot be parsed.
        """
        config_path = next((p for p in WORKSPACE_CONFIG_PATHS if fs.is_file(p)), None)
        if config_path is None:
            return None
        content = fs.read(config_path)
        if not content:
            return None
        try:
            data = jsonc.loads(content)
        except ValueError as e:
            log.debug(f"Ignoring unreadable workspace file {config_path}: {e}")
            return None
        if not isinstance(data, dict):
            return None
        return cls.from_dict(config_path, data)

    @classmethod
    def from_dict(cls, config_path: str, data: Dict[str, Any]) -> "AngularWorkspace":
        workspace = cls(config_path=config_path)
        for name, raw in (data.get("projects") or {}).items():
            if not isinstance(raw, dict):
                continue
            # "architect" is the older spelling of "targets".
            raw_targets = raw.get("targets") or raw.get("architect") or {}
            targets = {
                target_name: WorkspaceTarget(
                    name=target_name,
                    builder=target.get("builder"),
                    options=target.get("options") or {},
                    configurations=target.get("configurations") or {},
                )
                for target_name, target in raw_targets.items()
                if isinstance(target, dict)
            }
            workspace.projects[name] = WorkspaceProject(
                name=name,
                root=raw.get("root", ""),
                source_root=raw.get("sourceRoot"),
                project_type=raw.get("projectType"),
                targets=targets,
            )
        return workspace

    def get_project(self, name: str) -> Optional[WorkspaceProject]:
        return self.projects.get(name)


def get_target_tsconfig_path(
    fs: FileSystem, project: WorkspaceProject, target_name: str
) -> Optional[str]:
    """Resolved ``options.tsConfig`` of a project target, if configured."""
    target = project.targets.get(target_name)
    if target is None:
        return None
    tsconfig = target.options.get("tsConfig")
    if not isinstance(tsconfig, str) or not tsconfig:
        return None
    return fs.resolve(tsconfig)
