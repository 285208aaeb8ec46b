import json
from pathlib import Path
from textwrap import dedent
from typing import Any, Dict, List, Optional

import tomli_w
import yaml


class WorkspaceFactory:
    """Builds an Angular workspace on disk for integration tests."""

    def __init__(self, root_path: Path):
        self.root_path = root_path
        self._files_to_create: List[Dict[str, Any]] = []
        self._projects: Dict[str, Any] = {}
        self._config: Optional[Dict[str, Any]] = None

    def with_source(self, path: str, content: str) -> "WorkspaceFactory":
        self._files_to_create.append(
            {"path": path, "content": dedent(content), "format": "raw"}
        )
        return self

    def with_json(self, path: str, data: Dict[str, Any]) -> "WorkspaceFactory":
        self._files_to_create.append({"path": path, "content": data, "format": "json"})
        return self

    def with_project(
        self,
        name: str,
        root: str = "",
        build_tsconfig: Optional[str] = "tsconfig.app.json",
        test_tsconfig: Optional[str] = None,
    ) -> "WorkspaceFactory":
        """Registers a project; tsconfig paths are relative to the workspace."""
        targets: Dict[str, Any] = {}
        if build_tsconfig:
            targets["build"] = {
                "builder": "@angular-devkit/build-angular:browser",
                "options": {"tsConfig": build_tsconfig},
            }
        if test_tsconfig:
            targets["test"] = {
                "builder": "@angular-devkit/build-angular:karma",
                "options": {"tsConfig": test_tsconfig},
            }
        self._projects[name] = {
            "root": root,
            "projectType": "application",
            "architect": targets,
        }
        return self

    def with_tsconfig(
        self,
        path: str,
        include: Optional[List[str]] = None,
        files: Optional[List[str]] = None,
        **options: Any,
    ) -> "WorkspaceFactory":
        data: Dict[str, Any] = {"compilerOptions": options}
        if include is not None:
            data["include"] = include
        if files is not None:
            data["files"] = files
        return self.with_json(path, data)

    def with_upgrade_data(self, path: str, data: Dict[str, Any]) -> "WorkspaceFactory":
        self._files_to_create.append({"path": path, "content": data, "format": "yaml"})
        return self

    def with_config(self, config: Dict[str, Any]) -> "WorkspaceFactory":
        self._config = config
        return self

    def build(self) -> Path:
        # 1. Workspace and tool configuration
        if self._projects:
            self.with_json("angular.json", {"version": 1, "projects": self._projects})
        if self._config is not None:
            self._files_to_create.append(
                {"path": "ngupdate.toml", "content": self._config, "format": "toml"}
            )

        # 2. Write all files
        for file_spec in self._files_to_create:
            output_path = self.root_path / file_spec["path"]
            output_path.parent.mkdir(parents=True, exist_ok=True)

            content = file_spec["content"]
            fmt = file_spec["format"]

            if fmt == "toml":
                with output_path.open("wb") as f:
                    tomli_w.dump(content, f)
                continue
            if fmt == "yaml":
                content = yaml.dump(content, indent=2, sort_keys=False)
            elif fmt == "json":
                content = json.dumps(content, indent=2)
            output_path.write_text(content, encoding="utf-8")

        return self.root_path
