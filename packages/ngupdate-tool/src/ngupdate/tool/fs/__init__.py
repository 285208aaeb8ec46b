from .memory import MemoryFileSystem
from .real import RealFileSystem

__all__ = ["MemoryFileSystem", "RealFileSystem"]
