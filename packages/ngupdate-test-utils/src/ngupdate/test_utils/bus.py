from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

# Modules hold references to the singleton, so it is patched in place.
import ngupdate.common
from ngupdate.common.messaging.bus import MessageId


@dataclass
class CapturedMessage:
    level: str
    id: str
    params: Dict[str, Any]
    text: str


class SpyBus:
    """
    Captures everything sent through the global ``ngupdate.common.bus``
    instead of rendering it. The formatted text is kept next to the id.
    """

    def __init__(self):
        self.captured: List[CapturedMessage] = []

    @contextmanager
    def patch(self, monkeypatch: Any) -> Iterator["SpyBus"]:
        target = ngupdate.common.bus

        def capture(level: str, msg_id: MessageId, **kwargs: Any) -> None:
            self.captured.append(
                CapturedMessage(
                    level=level,
                    id=str(msg_id),
                    params=dict(kwargs),
                    text=target.format(msg_id, **kwargs),
                )
            )

        monkeypatch.setattr(target, "_render", capture)
        # Restored on teardown even if the CLI installs its own renderer.
        monkeypatch.setattr(target, "_renderer", None)
        yield self

    def get_messages(self) -> List[Dict[str, Any]]:
        return [
            {"level": m.level, "id": m.id, "params": m.params} for m in self.captured
        ]

    def get_params(self, msg_id: MessageId) -> List[Dict[str, Any]]:
        key = str(msg_id)
        return [m.params for m in self.captured if m.id == key]

    def get_texts(self, level: Optional[str] = None) -> List[str]:
        return [m.text for m in self.captured if level is None or m.level == level]

    def assert_id_called(self, msg_id: MessageId, level: Optional[str] = None):
        key = str(msg_id)
        for m in self.captured:
            if m.id == key and (level is None or m.level == level):
                return
        seen = [f"{m.level}:{m.id}" for m in self.captured]
        raise AssertionError(f"Message '{key}' was not sent.\nCaptured: {seen}")

    def assert_id_not_called(self, msg_id: MessageId):
        key = str(msg_id)
        if any(m.id == key for m in self.captured):
            raise AssertionError(f"Message '{key}' was sent unexpectedly.")
