from ngupdate.tool.fs import MemoryFileSystem
from ngupdate.workspace import (
    AngularWorkspace,
    find_stylesheet_files,
    get_target_tsconfig_path,
)

ANGULAR_JSON = """
{
  // Comments and trailing commas are allowed.
  "version": 1,
  "projects": {
    "app": {
      "root": "",
      "sourceRoot": "src",
      "projectType": "application",
      "architect": {
        "build": {"builder": "b", "options": {"tsConfig": "./tsconfig.app.json"}},
        "test": {"builder": "k", "options": {"tsConfig": "tsconfig.spec.json"}},
      },
    },
    "lib": {
      "root": "projects/lib",
      "targets": {"build": {"options": {}}},
    },
  },
}
"""


def test_load_reads_projects_and_targets():
    # 1. Arrange
    fs = MemoryFileSystem({"/angular.json": ANGULAR_JSON})

    # 2. Act
    workspace = AngularWorkspace.load(fs)

    # 3. Assert
    assert workspace is not None
    assert workspace.config_path == "/angular.json"
    assert list(workspace.projects) == ["app", "lib"]
    app = workspace.get_project("app")
    assert app.source_root == "src"
    assert app.project_type == "application"
    assert set(app.targets) == {"build", "test"}
    assert app.targets["build"].builder == "b"
    assert workspace.get_project("lib").root == "projects/lib"
    assert workspace.get_project("missing") is None


def test_load_falls_back_to_hidden_config():
    fs = MemoryFileSystem({"/.angular.json": '{"projects": {"a": {}}}'})

    workspace = AngularWorkspace.load(fs)

    assert workspace.config_path == "/.angular.json"
    assert list(workspace.projects) == ["a"]


def test_load_returns_none_without_usable_config():
    assert AngularWorkspace.load(MemoryFileSystem()) is None
    assert AngularWorkspace.load(MemoryFileSystem({"/angular.json": ""})) is None
    assert AngularWorkspace.load(MemoryFileSystem({"/angular.json": "{nope"})) is None
    assert AngularWorkspace.load(MemoryFileSystem({"/angular.json": "[1, 2]"})) is None


def test_get_target_tsconfig_path():
    # 1. Arrange
    fs = MemoryFileSystem({"/angular.json": ANGULAR_JSON})
    workspace = AngularWorkspace.load(fs)
    app = workspace.get_project("app")
    lib = workspace.get_project("lib")

    # 2. Act & 3. Assert
    assert get_target_tsconfig_path(fs, app, "build") == "/tsconfig.app.json"
    assert get_target_tsconfig_path(fs, app, "test") == "/tsconfig.spec.json"
    assert get_target_tsconfig_path(fs, app, "lint") is None
    assert get_target_tsconfig_path(fs, lib, "build") is None


def test_find_stylesheet_files_skips_build_output_and_dependencies():
    # 1. Arrange
    fs = MemoryFileSystem(
        {
            "/theme.css": "",
            "/src/styles.scss": "",
            "/src/app/app.CSS": "",
            "/src/app/app.ts": "",
            "/src/app/app.less": "",
            "/node_modules/lib/a.css": "",
            "/dist/out.css": "",
        }
    )

    # 2. Act
    found = find_stylesheet_files(fs, "/")
    less = find_stylesheet_files(fs, "/src", [".less"])

    # 3. Assert
    assert found == ["/theme.css", "/src/styles.scss", "/src/app/app.CSS"]
    assert less == ["/src/app/app.less"]
