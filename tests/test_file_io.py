"""Tests for file discovery and output writing."""

import pytest
from pathlib import Path

from subtitle_toolbox.exceptions import FileSystemError
from subtitle_toolbox.file_io import (
    detect_format,
    ensure_unique_path,
    get_file_metadata,
    read_file_head,
    scan_directory,
    write_output,
)
from subtitle_toolbox.models import SubtitleFormat


@pytest.fixture
def subtitle_tree(tmp_path):
    (tmp_path / "a.srt").write_text("x")
    (tmp_path / "b.LRC").write_text("x")
    (tmp_path / "notes.txt").write_text("x")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "c.srt").write_text("x")
    (tmp_path / ".hidden").mkdir()
    (tmp_path / ".hidden" / "d.srt").write_text("x")
    return tmp_path


class TestScanDirectory:

    def test_recursive_with_extensions(self, subtitle_tree):
        result = scan_directory(subtitle_tree, ["srt", ".lrc"], recursive=True)
        names = sorted(f.file_name for f in result.files)
        assert names == ["a.srt", "b.LRC", "c.srt"]
        assert result.scanned_dirs == 2
        assert not result.truncated

    def test_non_recursive(self, subtitle_tree):
        result = scan_directory(subtitle_tree, ["SRT"], recursive=False)
        assert [f.file_name for f in result.files] == ["a.srt"]

    def test_no_extensions_accepts_all(self, subtitle_tree):
        result = scan_directory(subtitle_tree, [], recursive=False)
        assert len(result.files) == 3

    def test_max_files_truncates(self, subtitle_tree):
        result = scan_directory(subtitle_tree, ["srt", "lrc"], recursive=True, max_files=1)
        assert len(result.files) == 1
        assert result.truncated

    def test_metadata(self, subtitle_tree):
        result = scan_directory(subtitle_tree, ["lrc"], recursive=False)
        meta = result.files[0]
        assert meta.extension == "LRC"
        assert meta.size == 1
        assert meta.source_directory == subtitle_tree

    def test_missing_directory(self, tmp_path):
        result = scan_directory(tmp_path / "missing", ["srt"])
        assert result.files == []
        assert result.scanned_dirs == 0


class TestEnsureUniquePath:

    def test_free_name(self, tmp_path):
        assert ensure_unique_path(tmp_path, "a.srt") == tmp_path / "a.srt"

    def test_index_suffix(self, tmp_path):
        (tmp_path / "a.srt").write_text("x")
        (tmp_path / "a (1).srt").write_text("x")
        assert ensure_unique_path(tmp_path, "a.srt") == tmp_path / "a (2).srt"


class TestWriteOutput:

    def test_creates_directory(self, tmp_path):
        target = write_output(tmp_path / "out", "a.lrc", "[00:01.00]hi")
        assert target == tmp_path / "out" / "a.lrc"
        assert target.read_text(encoding="utf-8") == "[00:01.00]hi"

    def test_collision_policy(self, tmp_path):
        write_output(tmp_path, "a.srt", "first")
        second = write_output(tmp_path, "a.srt", "second")
        assert second.name == "a (1).srt"

        replaced = write_output(tmp_path, "a.srt", "third", overwrite=True)
        assert replaced == tmp_path / "a.srt"
        assert replaced.read_text(encoding="utf-8") == "third"

    def test_unwritable_directory(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        with pytest.raises(FileSystemError):
            write_output(blocker, "a.srt", "content")


class TestHelpers:

    def test_detect_format(self):
        assert detect_format(Path("x/movie.SRT")) is SubtitleFormat.SRT
        assert detect_format(Path("song.lrc")) is SubtitleFormat.LRC
        assert detect_format(Path("notes.txt")) is None
        assert detect_format(Path("README")) is None

    def test_read_file_head(self, tmp_path):
        path = tmp_path / "a.srt"
        path.write_text("1\n2\n3\n4", encoding="utf-8")
        assert read_file_head(path, 2) == "1\n2"

    def test_get_file_metadata(self, tmp_path):
        assert get_file_metadata(tmp_path / "missing.srt") is None
        path = tmp_path / "a.srt"
        path.write_text("abc")
        assert get_file_metadata(path).size == 3
