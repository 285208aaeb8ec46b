import logging
from typing import Protocol


class UpdateLogger(Protocol):
    def debug(self, message: str) -> None: ...
    def info(self, message: str) -> None: ...
    def warn(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...


class StdlibLogger:
    """Forwards to a stdlib logger."""

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def debug(self, message: str) -> None:
        self._logger.debug(message)

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warn(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._logger.error(message)


default_logger = StdlibLogger(logging.getLogger("ngupdate.tool"))
