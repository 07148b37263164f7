"""Stream builders and scoped temporary files."""

from __future__ import annotations

import contextlib
import os
import tempfile
from contextlib import contextmanager
from typing import TYPE_CHECKING, BinaryIO

if TYPE_CHECKING:
    from collections.abc import Iterator
    from contextlib import AbstractContextManager


class StreamBuilder:
    """Turns raw byte streams into the streams callers read from and write to.

    The base builder hands the raw stream through unchanged. Subclasses layer
    conversions (decompression, decoding, ...) on top; a writer must flush
    everything it buffered into ``raw`` before its context exits.
    """

    def reader(self, raw: BinaryIO) -> AbstractContextManager[BinaryIO]:
        """Wrap a raw readable stream."""
        return contextlib.nullcontext(raw)

    def writer(self, raw: BinaryIO) -> AbstractContextManager[BinaryIO]:
        """Wrap a raw writable stream."""
        return contextlib.nullcontext(raw)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


RAW = StreamBuilder()


@contextmanager
def temp_file_name(prefix: str, suffix: str = "", *, dir: str | None = None) -> Iterator[str]:  # noqa: A002
    """Yield the name of a new, empty temporary file and remove it on exit.

    The file is removed whether the block completes, raises, or is left early.
    """
    fd, name = tempfile.mkstemp(prefix=f"{prefix}_", suffix=suffix, dir=dir)
    os.close(fd)
    try:
        yield name
    finally:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(name)
