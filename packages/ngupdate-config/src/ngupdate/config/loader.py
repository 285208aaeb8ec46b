import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib

CONFIG_FILE_NAME = "ngupdate.toml"


class ConfigError(Exception):
    pass


@dataclass
class UpdateConfig:
    target: Optional[str] = None
    data: List[str] = field(default_factory=list)
    projects: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    stylesheet_extensions: List[str] = field(default_factory=lambda: [".css", ".scss"])
    # Directory holding the config file; relative data paths resolve against it.
    root: Optional[Path] = None


def _find_config_file(search_path: Path) -> Optional[Tuple[Path, bool]]:
    """
    Walks up from ``search_path``. Returns the config file and whether it is a
    pyproject.toml, or None when neither file exists in any parent.
    """
    current_dir = search_path.resolve()
    while True:
        config_path = current_dir / CONFIG_FILE_NAME
        if config_path.is_file():
            return config_path, False
        pyproject_path = current_dir / "pyproject.toml"
        if pyproject_path.is_file():
            return pyproject_path, True
        if current_dir.parent == current_dir:
            return None
        current_dir = current_dir.parent


def _string_list(data: Dict[str, Any], key: str, config_path: Path) -> List[str]:
    value = data.get(key, [])
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' in {config_path} must be a list of strings.")
    return list(value)


def load_config_from_path(search_path: Path) -> UpdateConfig:
    found = _find_config_file(search_path)
    if found is None:
        return UpdateConfig()

    config_path, is_pyproject = found
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    if is_pyproject:
        data = data.get("tool", {}).get("ngupdate", {})
        # A pyproject.toml without our table does not configure anything.
        if not data:
            return UpdateConfig()

    target = data.get("target")
    if target is not None and not isinstance(target, (str, int)):
        raise ConfigError(f"'target' in {config_path} must be a string or number.")

    config = UpdateConfig(
        target=str(target) if target is not None else None,
        data=_string_list(data, "data", config_path),
        projects=_string_list(data, "projects", config_path),
        exclude=_string_list(data, "exclude", config_path),
        root=config_path.parent,
    )
    if "stylesheet_extensions" in data:
        config.stylesheet_extensions = _string_list(
            data, "stylesheet_extensions", config_path
        )
    return config
