import json
import logging
import posixpath
from collections import deque
from typing import Any, Dict, List, Optional

from ngupdate.tool.file_system import FileSystem
from .checker import TypeChecker
from .imports import get_module_specifiers
from .source_file import SourceFile

log = logging.getLogger(__name__)

_RELATIVE_SUFFIXES = (".ts", ".tsx", ".d.ts", "/index.ts", "/index.tsx", "/index.d.ts")
_SOURCE_EXTENSIONS = (".ts", ".tsx")


def _split_package_name(specifier: str) -> List[str]:
    segments = specifier.split("/")
    if specifier.startswith("@") and len(segments) > 1:
        return ["/".join(segments[:2])] + segments[2:]
    return segments


def resolve_module_name(
    specifier: str, containing_file: str, fs: FileSystem
) -> Optional[str]:
    """
    Resolves an import specifier to a file path.

    Relative specifiers resolve to TypeScript sources next to the importing
    file. Bare specifiers only resolve to declaration files inside the
    nearest ``node_modules`` directory.
    """
    containing_dir = posixpath.dirname(containing_file)
    if specifier.startswith((".", "/")):
        base = fs.resolve(containing_dir, specifier)
        if base.endswith(".js"):
            base = base[:-3]
        if base.endswith(_SOURCE_EXTENSIONS) and fs.is_file(base):
            return base
        for suffix in _RELATIVE_SUFFIXES:
            if fs.is_file(base + suffix):
                return base + suffix
        return None

    directory = containing_dir
    while True:
        if posixpath.basename(directory) != "node_modules":
            resolved = _resolve_in_node_modules(
                fs.resolve(directory, "node_modules", specifier), fs
            )
            if resolved is not None:
                return resolved
        if directory == "/":
            return None
        directory = posixpath.dirname(directory)


def _resolve_in_node_modules(package_path: str, fs: FileSystem) -> Optional[str]:
    if fs.is_file(package_path + ".d.ts"):
        return package_path + ".d.ts"
    manifest = fs.read(package_path + "/package.json")
    if manifest is not None:
        try:
            data: Dict[str, Any] = json.loads(manifest)
        except json.JSONDecodeError:
            log.debug(f"Ignoring malformed {package_path}/package.json")
            data = {}
        typings = data.get("types") or data.get("typings")
        if isinstance(typings, str):
            candidate = fs.resolve(package_path, typings)
            if fs.is_file(candidate):
                return candidate
            if fs.is_file(candidate + ".d.ts"):
                return candidate + ".d.ts"
    if fs.is_file(package_path + "/index.d.ts"):
        return package_path + "/index.d.ts"
    return None


class Program:
    """
    The set of parsed source files reachable from the root names by
    following imports and re-exports.
    """

    def __init__(
        self,
        root_names: List[str],
        fs: FileSystem,
        options: Optional[Dict[str, Any]] = None,
    ):
        self.fs = fs
        self.options = options or {}
        self.root_names = [fs.resolve(name) for name in root_names]
        self._files: Dict[str, SourceFile] = {}
        self._type_checker: Optional[TypeChecker] = None
        self._load()

    def _load(self) -> None:
        queue = deque(self.root_names)
        while queue:
            path = queue.popleft()
            if path in self._files:
                continue
            text = self.fs.read(path)
            if text is None:
                log.warning(f"Could not read source file: {path}")
                continue
            source_file = SourceFile.parse(path, text)
            self._files[path] = source_file
            for specifier in get_module_specifiers(source_file):
                target = resolve_module_name(specifier, path, self.fs)
                if target is None:
                    log.debug(f"Unresolved module '{specifier}' in {path}")
                elif target not in self._files:
                    queue.append(target)

    def get_source_files(self) -> List[SourceFile]:
        return list(self._files.values())

    def get_source_file(self, path: str) -> Optional[SourceFile]:
        return self._files.get(self.fs.resolve(path))

    def get_root_file_names(self) -> List[str]:
        return list(self.root_names)

    def is_source_file_from_external_library(self, source_file: SourceFile) -> bool:
        return source_file.is_from_external_library

    def get_type_checker(self) -> TypeChecker:
        if self._type_checker is None:
            self._type_checker = TypeChecker(self)
        return self._type_checker
