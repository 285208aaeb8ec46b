from typing import List, Sequence

from ngupdate.tool.file_system import FileSystem

DEFAULT_STYLESHEET_EXTENSIONS = (".css", ".scss")

# Directories that never hold first-party stylesheets.
IGNORED_DIRECTORIES = frozenset({"node_modules", "dist"})


def find_stylesheet_files(
    fs: FileSystem,
    base_dir: str,
    extensions: Sequence[str] = DEFAULT_STYLESHEET_EXTENSIONS,
) -> List[str]:
    """
    Collects every stylesheet below ``base_dir``. Global stylesheets are not
    referenced by any component, so this is the only way to reach them.
    """
    suffixes = tuple(ext.lower() for ext in extensions)
    results: List[str] = []
    pending = [fs.resolve(base_dir)]
    while pending:
        directory = pending.pop(0)
        entry = fs.read_directory(directory)
        for name in entry.files:
            if name.lower().endswith(suffixes):
                results.append(fs.resolve(directory, name))
        for name in entry.directories:
            if name not in IGNORED_DIRECTORIES:
                pending.append(fs.resolve(directory, name))
    return results
