from typing import Any


class SemanticPointer:
    """
    Message id assembled by attribute access: ``L.update.run.start`` points
    at the catalog key ``update.run.start``. Pointers are immutable.
    """

    __slots__ = ("_key",)

    def __init__(self, key: str = ""):
        object.__setattr__(self, "_key", key)

    def __getattr__(self, name: str) -> "SemanticPointer":
        # Private and dunder lookups are never message segments.
        if name.startswith("_"):
            raise AttributeError(name)
        return SemanticPointer(f"{self._key}.{name}" if self._key else name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Cannot set '{name}' on a message id")

    def __str__(self) -> str:
        return self._key

    def __repr__(self) -> str:
        return f"L.{self._key}" if self._key else "L"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, SemanticPointer):
            return self._key == other._key
        return isinstance(other, str) and other == self._key

    def __hash__(self) -> int:
        return hash(self._key)


L = SemanticPointer()
