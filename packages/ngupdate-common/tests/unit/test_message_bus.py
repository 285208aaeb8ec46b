from typing import List, Tuple

import ngupdate.common
from ngupdate.common import L
from ngupdate.common.messages import MessageCatalog
from ngupdate.common.messaging import MessageBus
from ngupdate.test_utils import SpyBus


class ListRenderer:
    def __init__(self):
        self.rendered: List[Tuple[str, str]] = []

    def render(self, message: str, level: str) -> None:
        self.rendered.append((level, message))


def _catalog_with(tmp_path, content: str) -> MessageCatalog:
    messages_dir = tmp_path / "messages" / "en"
    messages_dir.mkdir(parents=True)
    (messages_dir / "test.yaml").write_text(content, encoding="utf-8")
    return MessageCatalog(roots=[tmp_path])


def test_bus_forwards_to_renderer_with_spy(monkeypatch):
    # 1. Arrange
    spy_bus = SpyBus()

    # 2. Act
    with spy_bus.patch(monkeypatch):
        ngupdate.common.bus.info(L.greeting, name="World")
        ngupdate.common.bus.success(L.greeting, name="Angular")

    # 3. Assert
    messages = spy_bus.get_messages()
    assert messages == [
        {"level": "info", "id": "greeting", "params": {"name": "World"}},
        {"level": "success", "id": "greeting", "params": {"name": "Angular"}},
    ]


def test_bus_formats_catalog_templates(tmp_path):
    # 1. Arrange
    catalog = _catalog_with(tmp_path, "greeting:\n  hello: 'Hello {name}'\n")
    bus = MessageBus(message_catalog=catalog)
    renderer = ListRenderer()
    bus.set_renderer(renderer)

    # 2. Act
    bus.warning(L.greeting.hello, name="CDK")

    # 3. Assert
    assert renderer.rendered == [("warning", "Hello CDK")]


def test_bus_falls_back_to_message_id(tmp_path):
    # 1. Arrange
    bus = MessageBus(message_catalog=MessageCatalog(roots=[tmp_path]))
    renderer = ListRenderer()
    bus.set_renderer(renderer)

    # 2. Act
    bus.info(L.nonexistent.key)

    # 3. Assert
    assert renderer.rendered == [("info", "nonexistent.key")]


def test_bus_reports_formatting_errors(tmp_path):
    # 1. Arrange
    catalog = _catalog_with(tmp_path, "needs_arg: 'Value: {value}'\n")
    bus = MessageBus(message_catalog=catalog)
    renderer = ListRenderer()
    bus.set_renderer(renderer)

    # 2. Act
    bus.error(L.needs_arg)

    # 3. Assert
    assert renderer.rendered == [("error", "<formatting_error for 'needs_arg'>")]


def test_bus_does_not_fail_without_renderer(tmp_path):
    bus = MessageBus(message_catalog=MessageCatalog(roots=[tmp_path]))
    bus.info("some.id")


def test_format_works_without_renderer(tmp_path):
    catalog = _catalog_with(tmp_path, "entry: '  [EDIT] {path}'\n")
    bus = MessageBus(message_catalog=catalog)

    assert bus.renderer is None
    assert bus.format(L.entry, path="/src/a.ts") == "  [EDIT] /src/a.ts"
    assert bus.format(L.entry) == "<formatting_error for 'entry'>"
