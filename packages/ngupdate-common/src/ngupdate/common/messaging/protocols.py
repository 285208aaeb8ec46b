from typing import Protocol


class Renderer(Protocol):
    """Presents an already formatted message at one of the bus levels."""

    def render(self, message: str, level: str) -> None:
        """``level`` is one of debug, info, success, warning or error."""
        ...
