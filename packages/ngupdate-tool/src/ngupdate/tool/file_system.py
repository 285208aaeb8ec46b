import logging
import posixpath
from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .exceptions import InvalidEditError

log = logging.getLogger(__name__)


class EditKind(str, Enum):
    INSERT_LEFT = "insert_left"
    INSERT_RIGHT = "insert_right"
    REMOVE = "remove"


@dataclass(frozen=True)
class TextEdit:
    position: int
    kind: EditKind
    payload: str = ""
    length: int = 0


@dataclass
class DirectoryEntry:
    directories: List[str] = field(default_factory=list)
    files: List[str] = field(default_factory=list)


class UpdateRecorder:
    """
    Records edits against the original text of one file. Nothing touches the
    file until the owning FileSystem commits.
    """

    def __init__(self, file_path: str):
        self.file_path = file_path
        self._edits: List[TextEdit] = []

    @property
    def edits(self) -> List[TextEdit]:
        return list(self._edits)

    def remove(self, offset: int, length: int) -> "UpdateRecorder":
        self._edits.append(TextEdit(offset, EditKind.REMOVE, length=length))
        return self

    def insert_left(self, offset: int, text: str) -> "UpdateRecorder":
        self._edits.append(TextEdit(offset, EditKind.INSERT_LEFT, payload=text))
        return self

    def insert_right(self, offset: int, text: str) -> "UpdateRecorder":
        self._edits.append(TextEdit(offset, EditKind.INSERT_RIGHT, payload=text))
        return self


def apply_edits(text: str, edits: List[TextEdit], file_path: str = "") -> str:
    """
    Applies recorded edits to the original text in a single pass.

    At one offset the output is: every insert_left payload, then every
    insert_right payload (each group in recording order), then the original
    character unless a removal covers it. Overlapping removals collapse.
    """
    length = len(text)
    removed = bytearray(length)
    left: Dict[int, List[str]] = defaultdict(list)
    right: Dict[int, List[str]] = defaultdict(list)

    for edit in edits:
        end = edit.position + edit.length
        if edit.position < 0 or end > length or edit.length < 0:
            raise InvalidEditError(file_path, edit.position, length)
        if edit.kind == EditKind.REMOVE:
            removed[edit.position : end] = b"\x01" * edit.length
        elif edit.kind == EditKind.INSERT_LEFT:
            left[edit.position].append(edit.payload)
        else:
            right[edit.position].append(edit.payload)

    parts: List[str] = []
    for index in range(length + 1):
        if index in left:
            parts.extend(left[index])
        if index in right:
            parts.extend(right[index])
        if index < length and not removed[index]:
            parts.append(text[index])
    return "".join(parts)


class FileSystem(ABC):
    """
    Virtual file system the update tool reads from and writes through.

    Paths are POSIX-style and absolute; ``resolve`` turns arbitrary segments
    into that form. Edits are buffered per path and only applied by
    ``commit_edits``. ``create``, ``overwrite`` and ``delete`` apply at once.
    """

    def __init__(self):
        self._recorders: Dict[str, UpdateRecorder] = {}

    # --- Primitives ---

    @abstractmethod
    def is_file(self, path: str) -> bool: ...

    @abstractmethod
    def is_directory(self, path: str) -> bool: ...

    @abstractmethod
    def read(self, path: str) -> Optional[str]:
        """Returns the file content, or None when the file does not exist."""

    @abstractmethod
    def read_directory(self, path: str) -> DirectoryEntry: ...

    @abstractmethod
    def _write(self, path: str, content: str) -> None: ...

    @abstractmethod
    def _remove(self, path: str) -> None: ...

    # --- Derived operations ---

    def exists(self, path: str) -> bool:
        resolved = self.resolve(path)
        # Nothing exists below a file.
        parent = posixpath.dirname(resolved)
        while parent != "/":
            if self.is_file(parent):
                return False
            parent = posixpath.dirname(parent)
        return self.is_file(resolved) or self.is_directory(resolved)

    def resolve(self, *segments: str) -> str:
        path = "/"
        for segment in segments:
            path = posixpath.join(path, segment)
        path = posixpath.normpath(path)
        # normpath keeps a leading '//' as POSIX allows it.
        if path.startswith("//"):
            path = "/" + path.lstrip("/")
        return path

    def edit(self, path: str) -> UpdateRecorder:
        resolved = self.resolve(path)
        recorder = self._recorders.get(resolved)
        if recorder is None:
            recorder = UpdateRecorder(resolved)
            self._recorders[resolved] = recorder
        return recorder

    @property
    def pending_paths(self) -> List[str]:
        return [path for path, rec in self._recorders.items() if rec.edits]

    def preview(self) -> List[str]:
        return [
            f"[EDIT] {path} ({len(rec.edits)} changes)"
            for path, rec in self._recorders.items()
            if rec.edits
        ]

    def commit_edits(self) -> List[str]:
        """
        Applies every buffered edit and clears the recorder cache. All new
        contents are computed before any file is written.
        """
        new_contents: Dict[str, str] = {}
        for path, recorder in self._recorders.items():
            edits = recorder.edits
            if not edits:
                continue
            original = self.read(path)
            if original is None:
                raise FileNotFoundError(f"Cannot commit edits, file not found: {path}")
            new_contents[path] = apply_edits(original, edits, path)

        for path, content in new_contents.items():
            self._write(path, content)
            log.debug(f"Committed edits to {path}")

        self._recorders.clear()
        return list(new_contents)

    def create(self, path: str, content: str) -> None:
        resolved = self.resolve(path)
        if self.exists(resolved):
            raise FileExistsError(f"File already exists: {resolved}")
        self._write(resolved, content)

    def overwrite(self, path: str, content: str) -> None:
        resolved = self.resolve(path)
        if not self.is_file(resolved):
            raise FileNotFoundError(f"Cannot overwrite missing file: {resolved}")
        self._write(resolved, content)

    def delete(self, path: str) -> None:
        resolved = self.resolve(path)
        if not self.is_file(resolved):
            raise FileNotFoundError(f"Cannot delete missing file: {resolved}")
        self._recorders.pop(resolved, None)
        self._remove(resolved)
