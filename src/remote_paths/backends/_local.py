"""Local file paths."""

from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any, BinaryIO

from remote_paths._errors import InvalidAddress
from remote_paths._path import BasePath
from remote_paths._uri import parse_uri, scheme_of

if TYPE_CHECKING:
    from collections.abc import Iterator

    from remote_paths._streams import StreamBuilder
    from remote_paths._types import PathLike


class FilePath(BasePath):
    """A file on the local filesystem.

    Accepts plain file names and ``file://`` URIs. Request options passed to
    the stream methods are accepted and ignored.

    :param path: File name or ``file://`` URI.
    :param builder: Stream builder for converted reads and writes.
    """

    __slots__ = ("_path",)

    scheme = "file"

    def __init__(self, path: PathLike, *, builder: StreamBuilder | None = None) -> None:
        super().__init__(builder=builder)
        text = os.fspath(path)
        if scheme_of(text) == "file":
            parsed = parse_uri(text)
            if parsed.host not in ("", "localhost"):
                raise InvalidAddress("file:// URIs must not name a remote host", path=text, backend=self.scheme)
            text = parsed.path
        if not text:
            raise InvalidAddress("File name must not be empty", path=text, backend=self.scheme)
        object.__setattr__(self, "_path", Path(text))

    @property
    def path(self) -> Path:
        """The local filesystem path."""
        return self._path

    def __str__(self) -> str:
        return str(self._path)

    def __repr__(self) -> str:
        return f"FilePath({str(self._path)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FilePath):
            return self._path == other._path
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._path)

    def __fspath__(self) -> str:
        return str(self._path)

    def join(self, *elements: str) -> FilePath:
        return FilePath(self._path.joinpath(*elements), builder=self._builder)

    def relative(self) -> bool:
        return not self._path.is_absolute()

    # region: metadata

    def exists(self) -> bool:
        return self._path.exists()

    def size(self) -> int | None:
        try:
            return self._path.stat().st_size
        except FileNotFoundError:
            return None

    def delete(self) -> FilePath:
        self._path.unlink(missing_ok=True)
        return self

    def mkpath(self) -> FilePath:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        return self

    def mkdir(self) -> FilePath:
        self._path.mkdir(parents=True, exist_ok=True)
        return self

    def partial_files_visible(self) -> bool:
        return False

    # endregion

    # region: streams

    @contextmanager
    def stream_reader(self, **options: Any) -> Iterator[BinaryIO]:
        with open(self._path, "rb") as raw:
            yield raw

    @contextmanager
    def stream_writer(self, **options: Any) -> Iterator[BinaryIO]:
        """Write into a sibling temp file and move it into place on success."""
        self.mkpath()
        fd, tmp_path = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=str(self._path.parent))
        try:
            with os.fdopen(fd, "wb") as raw:
                yield raw
            os.replace(tmp_path, self._path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    # endregion
