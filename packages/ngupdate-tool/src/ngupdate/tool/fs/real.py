import logging
from pathlib import Path
from typing import Dict, List, Optional

from ngupdate.tool.file_system import DirectoryEntry, FileSystem

log = logging.getLogger(__name__)


class RealFileSystem(FileSystem):
    """
    Disk-backed file system rooted at ``root``: the virtual path ``/src/a.ts``
    maps to ``root/src/a.ts``.

    With ``dry_run`` every write and delete lands in an in-memory overlay
    which later reads observe, and nothing on disk changes.
    """

    def __init__(self, root: Path, dry_run: bool = False):
        super().__init__()
        self.root = Path(root).resolve()
        self.dry_run = dry_run
        # None marks a deletion.
        self._overlay: Dict[str, Optional[str]] = {}
        self._changed: List[str] = []

    @property
    def changed_files(self) -> List[str]:
        return list(self._changed)

    def to_real_path(self, path: str) -> Path:
        return self.root / self.resolve(path).lstrip("/")

    def to_virtual_path(self, real_path: Path) -> str:
        relative = Path(real_path).resolve().relative_to(self.root)
        return self.resolve(relative.as_posix())

    def is_file(self, path: str) -> bool:
        resolved = self.resolve(path)
        if resolved in self._overlay:
            return self._overlay[resolved] is not None
        return self.to_real_path(resolved).is_file()

    def is_directory(self, path: str) -> bool:
        resolved = self.resolve(path)
        if self.to_real_path(resolved).is_dir():
            return True
        prefix = resolved.rstrip("/") + "/"
        return any(
            p.startswith(prefix) and content is not None
            for p, content in self._overlay.items()
        )

    def read(self, path: str) -> Optional[str]:
        resolved = self.resolve(path)
        if resolved in self._overlay:
            return self._overlay[resolved]
        real_path = self.to_real_path(resolved)
        if not real_path.is_file():
            return None
        try:
            # newline="" keeps CRLF so offsets match the bytes on disk.
            with real_path.open("r", encoding="utf-8", newline="") as f:
                return f.read()
        except UnicodeDecodeError as e:
            log.warning(f"Cannot decode {real_path} as UTF-8: {e}")
            return None

    def read_directory(self, path: str) -> DirectoryEntry:
        resolved = self.resolve(path)
        directories = set()
        files = set()
        real_dir = self.to_real_path(resolved)
        if real_dir.is_dir():
            for child in real_dir.iterdir():
                if child.is_dir():
                    directories.add(child.name)
                elif child.is_file():
                    files.add(child.name)

        prefix = "/" if resolved == "/" else resolved + "/"
        for overlay_path, content in self._overlay.items():
            if not overlay_path.startswith(prefix):
                continue
            head, sep, _ = overlay_path[len(prefix) :].partition("/")
            if sep:
                if content is not None:
                    directories.add(head)
            elif content is None:
                files.discard(head)
            else:
                files.add(head)
        return DirectoryEntry(directories=sorted(directories), files=sorted(files))

    def _track(self, path: str) -> None:
        if path not in self._changed:
            self._changed.append(path)

    def _write(self, path: str, content: str) -> None:
        resolved = self.resolve(path)
        self._track(resolved)
        if self.dry_run:
            self._overlay[resolved] = content
            return
        real_path = self.to_real_path(resolved)
        real_path.parent.mkdir(parents=True, exist_ok=True)
        with real_path.open("w", encoding="utf-8", newline="") as f:
            f.write(content)

    def _remove(self, path: str) -> None:
        resolved = self.resolve(path)
        self._track(resolved)
        if self.dry_run:
            self._overlay[resolved] = None
            return
        real_path = self.to_real_path(resolved)
        if real_path.exists():
            real_path.unlink()
