from ngupdate.tool.fs import RealFileSystem


def test_real_file_system_maps_virtual_paths(tmp_path):
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "a.ts").write_text("let a;", encoding="utf-8")
    fs = RealFileSystem(tmp_path)

    assert fs.read("/src/a.ts") == "let a;"
    assert fs.read("/src/missing.ts") is None
    assert fs.is_directory("/src")
    assert fs.to_virtual_path(tmp_path / "src" / "a.ts") == "/src/a.ts"


def test_real_file_system_keeps_crlf(tmp_path):
    (tmp_path / "a.html").write_bytes(b"<a>\r\n<b>")
    fs = RealFileSystem(tmp_path)

    assert fs.read("/a.html") == "<a>\r\n<b>"


def test_commit_writes_to_disk(tmp_path):
    (tmp_path / "a.ts").write_text("old", encoding="utf-8")
    fs = RealFileSystem(tmp_path)
    fs.edit("/a.ts").remove(0, 3).insert_right(0, "new")

    fs.commit_edits()

    assert (tmp_path / "a.ts").read_text(encoding="utf-8") == "new"
    assert fs.changed_files == ["/a.ts"]


def test_dry_run_keeps_disk_untouched(tmp_path):
    # 1. Arrange
    (tmp_path / "a.ts").write_text("old", encoding="utf-8")
    fs = RealFileSystem(tmp_path, dry_run=True)
    fs.edit("/a.ts").remove(0, 3).insert_right(0, "new")

    # 2. Act
    fs.commit_edits()
    fs.create("/gen/b.ts", "b")

    # 3. Assert
    assert (tmp_path / "a.ts").read_text(encoding="utf-8") == "old"
    assert not (tmp_path / "gen").exists()
    assert fs.read("/a.ts") == "new"
    assert fs.read_directory("/gen").files == ["b.ts"]
    assert fs.changed_files == ["/a.ts", "/gen/b.ts"]


def test_dry_run_delete_hides_file(tmp_path):
    (tmp_path / "a.ts").write_text("x", encoding="utf-8")
    fs = RealFileSystem(tmp_path, dry_run=True)

    fs.delete("/a.ts")

    assert (tmp_path / "a.ts").exists()
    assert not fs.is_file("/a.ts")
    assert fs.read_directory("/").files == []


def test_paths_below_a_file_do_not_exist_on_disk(tmp_path):
    (tmp_path / "a.ts").write_text("x", encoding="utf-8")
    fs = RealFileSystem(tmp_path, dry_run=True)
    fs.create("/b.ts", "y")

    assert fs.exists("/a.ts")
    assert not fs.exists("/a.ts/package.json")
    assert fs.exists("/b.ts")
    assert not fs.exists("/b.ts/package.json")
    assert not (tmp_path / "b.ts").exists()
