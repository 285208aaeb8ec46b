from ngupdate.common import L, bus


class BusLogger:
    """UpdateLogger that routes driver output through the message bus."""

    def debug(self, message: str) -> None:
        bus.debug(L.update.log.line, message=message)

    def info(self, message: str) -> None:
        bus.info(L.update.log.line, message=message)

    def warn(self, message: str) -> None:
        bus.warning(L.update.log.line, message=message)

    def error(self, message: str) -> None:
        bus.error(L.update.log.line, message=message)
