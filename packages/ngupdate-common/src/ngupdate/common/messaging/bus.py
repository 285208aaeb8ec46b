import logging
from typing import Any, Optional, Union

from ngupdate.common.messages import MessageCatalog, SemanticPointer, catalog
from .protocols import Renderer

log = logging.getLogger(__name__)

MessageId = Union[str, SemanticPointer]


class MessageBus:
    """
    Turns message ids into user-facing text through the catalog and hands
    the result to the active renderer. Without a renderer every message is
    dropped, which keeps library code quiet outside the CLI.
    """

    def __init__(self, message_catalog: Optional[MessageCatalog] = None):
        self._renderer: Optional[Renderer] = None
        self._catalog = message_catalog or catalog

    @property
    def renderer(self) -> Optional[Renderer]:
        return self._renderer

    def set_renderer(self, renderer: Optional[Renderer]):
        self._renderer = renderer

    def format(self, msg_id: MessageId, **kwargs: Any) -> str:
        template = self._catalog.get(msg_id)
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError) as e:
            log.debug(f"Cannot format '{msg_id}' with {sorted(kwargs)}: {e!r}")
            return f"<formatting_error for '{msg_id}'>"

    def _render(self, level: str, msg_id: MessageId, **kwargs: Any) -> None:
        if self._renderer is None:
            return
        self._renderer.render(self.format(msg_id, **kwargs), level)

    def debug(self, msg_id: MessageId, **kwargs: Any) -> None:
        self._render("debug", msg_id, **kwargs)

    def info(self, msg_id: MessageId, **kwargs: Any) -> None:
        self._render("info", msg_id, **kwargs)

    def success(self, msg_id: MessageId, **kwargs: Any) -> None:
        self._render("success", msg_id, **kwargs)

    def warning(self, msg_id: MessageId, **kwargs: Any) -> None:
        self._render("warning", msg_id, **kwargs)

    def error(self, msg_id: MessageId, **kwargs: Any) -> None:
        self._render("error", msg_id, **kwargs)


bus = MessageBus()
