from ngupdate.common import L
from ngupdate.common.messages import MessageCatalog, flatten_messages
from ngupdate.common.messages.catalog import DEFAULT_ASSETS_ROOT


def _write(path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_flatten_messages_builds_dotted_keys():
    flat = flatten_messages({"a": {"b": {"c": "deep"}, "d": "shallow"}, "e": None})
    assert flat == {"a.b.c": "deep", "a.d": "shallow"}


def test_catalog_prefers_target_language(tmp_path):
    # 1. Arrange
    _write(tmp_path / "messages" / "en" / "m.yaml", "hello: Hello\nbye: Bye\n")
    _write(tmp_path / "messages" / "de" / "m.yaml", "hello: Hallo\n")
    catalog = MessageCatalog(roots=[tmp_path])

    # 2. Act / 3. Assert
    assert catalog.get(L.hello, lang="de") == "Hallo"
    # Missing in German, found in the default language.
    assert catalog.get(L.bye, lang="de") == "Bye"
    assert catalog.get(L.missing, lang="de") == "missing"


def test_catalog_reads_language_from_environment(tmp_path, monkeypatch):
    _write(tmp_path / "messages" / "fr" / "m.yaml", "hello: Bonjour\n")
    catalog = MessageCatalog(roots=[tmp_path])
    monkeypatch.setenv("NGUPDATE_LANG", "fr")

    assert catalog.get(L.hello) == "Bonjour"


def test_workspace_overrides_win_over_packaged_messages(tmp_path):
    # 1. Arrange
    packaged = tmp_path / "assets"
    workspace = tmp_path / "workspace"
    _write(packaged / "messages" / "en" / "m.yaml", "hello: Packaged\n")
    _write(
        workspace / ".ngupdate" / "messages" / "en" / "m.yaml", "hello: Overridden\n"
    )
    catalog = MessageCatalog(roots=[packaged])
    assert catalog.get(L.hello) == "Packaged"

    # 2. Act
    catalog.add_root(workspace)

    # 3. Assert
    assert catalog.get(L.hello) == "Overridden"


def test_unreadable_message_files_are_skipped(tmp_path):
    _write(tmp_path / "messages" / "en" / "bad.yaml", "key: [unclosed\n")
    _write(tmp_path / "messages" / "en" / "good.yaml", "key2: fine\n")
    catalog = MessageCatalog(roots=[tmp_path])

    assert catalog.get(L.key2) == "fine"
    assert catalog.get(L.key) == "key"


def test_packaged_catalog_covers_cli_messages():
    catalog = MessageCatalog(roots=[DEFAULT_ASSETS_ROOT])

    assert catalog.get(L.update.log.line, lang="en") == "{message}"
    assert catalog.get(L.error.generic, lang="en") == "Error: {error}"
    assert catalog.get(L.cli.app.description, lang="en") != "cli.app.description"
