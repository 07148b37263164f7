"""Tests for local file paths."""

from __future__ import annotations

from pathlib import Path

import pytest

from remote_paths._errors import InvalidAddress
from remote_paths.backends._local import FilePath


class TestFilePathAddressing:
    def test_plain_name(self, tmp_path: Path) -> None:
        path = FilePath(tmp_path / "a.txt")
        assert path.path == tmp_path / "a.txt"
        assert str(path) == str(tmp_path / "a.txt")

    def test_file_uri(self) -> None:
        assert FilePath("file:///tmp/a.txt").path == Path("/tmp/a.txt")
        assert FilePath("file://localhost/tmp/a.txt").path == Path("/tmp/a.txt")

    def test_remote_host_rejected(self) -> None:
        with pytest.raises(InvalidAddress, match="remote host"):
            FilePath("file://server/share/a.txt")

    def test_empty_rejected(self) -> None:
        with pytest.raises(InvalidAddress):
            FilePath("")

    def test_join(self, tmp_path: Path) -> None:
        assert FilePath(tmp_path).join("x", "y.txt").path == tmp_path / "x" / "y.txt"

    def test_relative(self, tmp_path: Path) -> None:
        assert FilePath("data/a.txt").relative() is True
        assert FilePath(tmp_path).relative() is False

    def test_fspath(self, tmp_path: Path) -> None:
        path = FilePath(tmp_path / "a.txt")
        path.write(b"x")
        with open(path, "rb") as file:
            assert file.read() == b"x"

    def test_immutable(self, tmp_path: Path) -> None:
        path = FilePath(tmp_path)
        with pytest.raises(AttributeError, match="immutable"):
            path._path = Path("/")  # type: ignore[misc]


class TestFilePathIO:
    def test_round_trip_creates_parents(self, tmp_path: Path) -> None:
        path = FilePath(tmp_path / "deep" / "dir" / "a.bin")
        path.write(b"\x00\x01payload")
        assert path.read() == b"\x00\x01payload"
        assert path.size() == 9

    def test_missing(self, tmp_path: Path) -> None:
        path = FilePath(tmp_path / "missing")
        assert path.exists() is False
        assert path.size() is None

    def test_delete_missing_succeeds(self, tmp_path: Path) -> None:
        path = FilePath(tmp_path / "missing")
        assert path.delete() is path

    def test_aborted_write_leaves_nothing(self, tmp_path: Path) -> None:
        path = FilePath(tmp_path / "a.txt")
        with pytest.raises(ValueError, match="stop"), path.writer() as stream:
            stream.write(b"partial")
            raise ValueError("stop")
        assert list(tmp_path.iterdir()) == []

    def test_aborted_write_keeps_previous_content(self, tmp_path: Path) -> None:
        path = FilePath(tmp_path / "a.txt")
        path.write(b"old")
        with pytest.raises(ValueError, match="stop"), path.writer() as stream:
            stream.write(b"new")
            raise ValueError("stop")
        assert path.read() == b"old"

    def test_mkdir(self, tmp_path: Path) -> None:
        path = FilePath(tmp_path / "x" / "y").mkdir()
        assert path.path.is_dir()

    def test_partial_files_not_visible(self, tmp_path: Path) -> None:
        assert FilePath(tmp_path / "a").partial_files_visible() is False

    def test_copy_and_move(self, tmp_path: Path) -> None:
        source = FilePath(tmp_path / "src.txt")
        source.write(b"content")
        copy = source.copy_to(str(tmp_path / "copy.txt"))
        assert copy.read() == b"content"
        moved = source.move_to(tmp_path / "moved.txt")
        assert moved.read() == b"content"
        assert source.exists() is False


class TestAcrossStores:
    def test_local_to_s3_and_back(self, s3_client: object, bucket: str, tmp_path: Path) -> None:
        from remote_paths.backends._s3 import S3Path

        local = FilePath(tmp_path / "up.txt")
        local.write(b"round trip")
        remote = S3Path(f"s3://{bucket}/up.txt", client=s3_client)
        local.copy_to(remote)
        assert remote.read() == b"round trip"

        back = remote.copy_to(tmp_path / "down.txt", convert=False)
        assert isinstance(back, FilePath)
        assert back.read() == b"round trip"
