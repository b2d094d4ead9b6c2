import os
import zipfile
from pathlib import Path

import pytest

from modpack.archive import archive_name, packed_message, write_archive
from modpack.catalog import CatalogEntry
from modpack.common import PackIOError


def contents(path):
    with zipfile.ZipFile(path) as zf:
        return {info.filename: zf.read(info) for info in zf.infolist()}


def test_writes_existing_files_with_forward_slashes(tmp_path):
    (tmp_path / "a.txt").write_text("alpha")
    (tmp_path / "dir").mkdir()
    catalog = [
        CatalogEntry(tmp_path / "a.txt", Path("Code") / "a.txt"),
        CatalogEntry(tmp_path / "gone.txt", Path("gone.txt")),
        CatalogEntry(tmp_path / "dir", Path("dir")),
    ]
    out = tmp_path / "out.zip"
    write_archive(out, catalog)
    assert contents(out) == {"Code/a.txt": b"alpha"}


def test_archive_name_normalizes_backslashes():
    assert archive_name(Path("Code\\Sub\\A.cs")) == "Code/Sub/A.cs"


def test_rewriting_is_idempotent(tmp_path):
    (tmp_path / "x.bin").write_bytes(b"\x00\x01")
    (tmp_path / "y.txt").write_text("why")
    catalog = [
        CatalogEntry(tmp_path / "x.bin", Path("x.bin")),
        CatalogEntry(tmp_path / "y.txt", Path("nested/y.txt")),
    ]
    write_archive(tmp_path / "one.zip", catalog)
    write_archive(tmp_path / "two.zip", catalog)
    assert contents(tmp_path / "one.zip") == contents(tmp_path / "two.zip")


def test_truncates_existing_archive(tmp_path):
    out = tmp_path / "out.zip"
    out.write_bytes(b"stale data that is not a zip")
    (tmp_path / "a.txt").write_text("a")
    write_archive(out, [CatalogEntry(tmp_path / "a.txt", Path("a.txt"))])
    assert contents(out) == {"a.txt": b"a"}


def test_unwritable_destination(tmp_path):
    with pytest.raises(PackIOError, match="Failed to create file"):
        write_archive(tmp_path / "missing" / "out.zip", [])


def test_packed_message_links_absolute_path(workdir):
    message = packed_message(Path("bin") / "Mod" / "Demo-0.1.0.zip")
    absolute = os.path.join(os.getcwd(), "bin", "Mod", "Demo-0.1.0.zip")
    assert message.startswith("Packed mod at: ")
    assert f"file://{absolute}" in message
    assert message.endswith(f"{absolute}\x1b]8;;\x1b\\")


def test_read_failure_removes_partial_archive(tmp_path, monkeypatch):
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "b.txt").write_text("b")
    catalog = [
        CatalogEntry(tmp_path / "a.txt", Path("a.txt")),
        CatalogEntry(tmp_path / "b.txt", Path("b.txt")),
    ]
    calls = []

    def failing_copy(src, dst):
        calls.append(src)
        if len(calls) == 2:
            raise OSError(5, "Input/output error")
        dst.write(src.read())

    monkeypatch.setattr("modpack.archive.shutil.copyfileobj", failing_copy)
    out = tmp_path / "out.zip"
    with pytest.raises(PackIOError, match="Failed to open"):
        write_archive(out, catalog)
    assert not out.exists()
