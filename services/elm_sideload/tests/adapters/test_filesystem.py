import pytest

from elm_sideload.adapters.errors import DirectoryNotFound, FileNotFound
from elm_sideload.adapters.filesystem.local import LocalFileSystem


def test_copy_directory_skips_excluded_names(tmp_path):
    source = tmp_path / "pkg"
    (source / "src").mkdir(parents=True)
    (source / "src" / "Main.elm").write_text("module Main exposing (..)\n")
    (source / ".git").mkdir()
    (source / ".git" / "HEAD").write_text("ref: refs/heads/main\n")

    LocalFileSystem().copy_directory(source, tmp_path / "out", exclude=(".git",))

    assert (tmp_path / "out" / "src" / "Main.elm").exists()
    assert not (tmp_path / "out" / ".git").exists()


def test_copy_directory_requires_source(tmp_path):
    with pytest.raises(DirectoryNotFound):
        LocalFileSystem().copy_directory(tmp_path / "missing", tmp_path / "out")


def test_write_file_replaces_content_and_creates_parents(tmp_path):
    fs = LocalFileSystem()
    target = tmp_path / "a" / "b.json"
    fs.write_file(target, "one")
    fs.write_file(target, "two")
    assert target.read_text() == "two"
    assert [p.name for p in target.parent.iterdir()] == ["b.json"]


def test_missing_files_are_classified(tmp_path):
    fs = LocalFileSystem()
    with pytest.raises(FileNotFound):
        fs.read_file(tmp_path / "nope.txt")
    with pytest.raises(FileNotFound):
        fs.delete_file(tmp_path / "nope.txt")


def test_delete_dir_ignores_missing(tmp_path):
    fs = LocalFileSystem()
    fs.delete_dir(tmp_path / "missing")
    (tmp_path / "d" / "e").mkdir(parents=True)
    fs.delete_dir(tmp_path / "d")
    assert not (tmp_path / "d").exists()
