import json
import logging
import posixpath
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Pattern, Set, Tuple

from ngupdate.tool.exceptions import TsconfigError
from ngupdate.tool.file_system import FileSystem
from ngupdate.tool.utils import jsonc

log = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".d.ts", ".ts", ".tsx")
DEFAULT_EXCLUDES = ["node_modules", "bower_components", "jspm_packages"]


@dataclass
class ParsedTsconfig:
    file_names: List[str]
    options: Dict[str, Any] = field(default_factory=dict)


# (directory the value is relative to, raw value)
_Located = Tuple[str, List[str]]


def _glob_to_regex(pattern: str) -> Pattern[str]:
    parts = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("".join(parts) + "$")


def _is_directory_pattern(pattern: str) -> bool:
    last = pattern.rstrip("/").rsplit("/", 1)[-1]
    return not any(c in last for c in "*?") and "." not in last


class _Matcher:
    def __init__(self, base_dir: str, patterns: List[str], fs: FileSystem):
        self._file_patterns: List[Pattern[str]] = []
        self._dir_prefixes: List[str] = []
        for pattern in patterns:
            absolute = fs.resolve(base_dir, pattern)
            if _is_directory_pattern(pattern):
                self._dir_prefixes.append(absolute.rstrip("/") + "/")
                self._file_patterns.append(_glob_to_regex(absolute.rstrip("/") + "/**/*"))
            else:
                self._file_patterns.append(_glob_to_regex(absolute))

    def matches_file(self, path: str) -> bool:
        return any(p.match(path) for p in self._file_patterns)

    def covers_directory(self, path: str) -> bool:
        directory = path.rstrip("/") + "/"
        return any(directory.startswith(prefix) for prefix in self._dir_prefixes)


def _resolve_extends(extends: str, config_dir: str, fs: FileSystem) -> Optional[str]:
    if extends.startswith((".", "/")):
        candidate = fs.resolve(config_dir, extends)
        if fs.is_file(candidate):
            return candidate
        if fs.is_file(candidate + ".json"):
            return candidate + ".json"
        return None
    # Package configs, e.g. "@tsconfig/strictest/tsconfig.json".
    directory = config_dir
    while True:
        candidate = fs.resolve(directory, "node_modules", extends)
        for option in (candidate, candidate + ".json", candidate + "/tsconfig.json"):
            if fs.is_file(option):
                return option
        if directory == "/":
            return None
        directory = posixpath.dirname(directory)


def _read_config(path: str, fs: FileSystem, seen: Set[str]) -> Dict[str, Any]:
    if path in seen:
        raise TsconfigError(f"Circular 'extends' chain through '{path}'.")
    seen.add(path)

    text = fs.read(path)
    if text is None:
        raise FileNotFoundError(f"Could not find tsconfig file: {path}")
    try:
        data = jsonc.loads(text) if text.strip() else {}
    except json.JSONDecodeError as e:
        raise TsconfigError(f"Could not parse tsconfig file '{path}': {e}") from e
    if not isinstance(data, dict):
        raise TsconfigError(f"Tsconfig file '{path}' does not contain an object.")

    config_dir = posixpath.dirname(path)
    merged: Dict[str, Any] = {"compilerOptions": {}}

    extends = data.get("extends")
    for base in [extends] if isinstance(extends, str) else (extends or []):
        base_path = _resolve_extends(base, config_dir, fs)
        if base_path is None:
            log.warning(f"Could not resolve extended tsconfig '{base}' from {path}")
            continue
        base_config = _read_config(base_path, fs, seen)
        merged["compilerOptions"].update(base_config["compilerOptions"])
        for key in ("files", "include", "exclude"):
            if key in base_config:
                merged[key] = base_config[key]

    merged["compilerOptions"].update(data.get("compilerOptions") or {})
    for key in ("files", "include", "exclude"):
        if key in data:
            merged[key] = (config_dir, list(data[key] or []))
    return merged


def _walk_files(directory: str, fs: FileSystem, exclude: _Matcher) -> List[str]:
    result = []
    stack = [directory]
    while stack:
        current = stack.pop()
        entry = fs.read_directory(current)
        for name in entry.files:
            result.append(fs.resolve(current, name))
        for name in reversed(entry.directories):
            child = fs.resolve(current, name)
            if not exclude.covers_directory(child):
                stack.append(child)
    return sorted(result)


def _walk_roots(base_dir: str, patterns: List[str], fs: FileSystem) -> List[str]:
    roots: List[str] = []
    for pattern in patterns:
        segments = fs.resolve(base_dir, pattern).split("/")
        fixed = []
        for segment in segments:
            if any(c in segment for c in "*?"):
                break
            fixed.append(segment)
        root = "/".join(fixed) or "/"
        if len(fixed) == len(segments) and not _is_directory_pattern(pattern):
            root = posixpath.dirname(root)
        if fs.is_directory(root) and root not in roots:
            roots.append(root)
    return roots


def parse_tsconfig_file(tsconfig_path: str, fs: FileSystem) -> ParsedTsconfig:
    """
    Resolves the root file names and compiler options of a tsconfig file,
    following ``extends`` and expanding ``files``/``include``/``exclude``.
    """
    path = fs.resolve(tsconfig_path)
    config = _read_config(path, fs, set())
    config_dir = posixpath.dirname(path)
    options = config["compilerOptions"]

    file_names: List[str] = []
    if "files" in config:
        base_dir, files = config["files"]
        for name in files:
            resolved = fs.resolve(base_dir, name)
            if fs.is_file(resolved):
                file_names.append(resolved)
            else:
                log.warning(f"File '{resolved}' listed in {path} does not exist.")

    include: Optional[_Located] = config.get("include")
    if include is None and "files" not in config:
        include = (config_dir, ["**/*"])

    if include is not None:
        exclude_dir, exclude_patterns = config.get("exclude") or (
            config_dir,
            list(DEFAULT_EXCLUDES),
        )
        if "exclude" not in config and options.get("outDir"):
            exclude_patterns.append(options["outDir"])
        exclude = _Matcher(exclude_dir, exclude_patterns, fs)
        include_matcher = _Matcher(include[0], include[1], fs)

        candidates: List[str] = []
        for base in _walk_roots(include[0], include[1], fs):
            candidates.extend(_walk_files(base, fs, exclude))

        for file_name in sorted(set(candidates)):
            if not file_name.endswith(SUPPORTED_EXTENSIONS):
                continue
            if exclude.matches_file(file_name):
                continue
            if include_matcher.matches_file(file_name) and file_name not in file_names:
                file_names.append(file_name)

    return ParsedTsconfig(file_names=file_names, options=options)
