from typing import Dict, Optional

from ngupdate.tool.file_system import DirectoryEntry, FileSystem


class MemoryFileSystem(FileSystem):
    """File system held in a dict. Directories exist implicitly through files."""

    def __init__(self, files: Optional[Dict[str, str]] = None):
        super().__init__()
        self.files: Dict[str, str] = {}
        for path, content in (files or {}).items():
            self.files[self.resolve(path)] = content

    def is_file(self, path: str) -> bool:
        return self.resolve(path) in self.files

    def is_directory(self, path: str) -> bool:
        resolved = self.resolve(path)
        if resolved == "/":
            return True
        prefix = resolved + "/"
        return any(p.startswith(prefix) for p in self.files)

    def read(self, path: str) -> Optional[str]:
        return self.files.get(self.resolve(path))

    def read_directory(self, path: str) -> DirectoryEntry:
        resolved = self.resolve(path)
        prefix = "/" if resolved == "/" else resolved + "/"
        directories = set()
        files = set()
        for file_path in self.files:
            if not file_path.startswith(prefix):
                continue
            head, sep, _ = file_path[len(prefix) :].partition("/")
            if sep:
                directories.add(head)
            else:
                files.add(head)
        return DirectoryEntry(directories=sorted(directories), files=sorted(files))

    def _write(self, path: str, content: str) -> None:
        self.files[self.resolve(path)] = content

    def _remove(self, path: str) -> None:
        self.files.pop(self.resolve(path), None)
