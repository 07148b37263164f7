"""BasePath — the contract every path backend implements, plus generic copies."""

from __future__ import annotations

import abc
import shutil
from contextlib import ExitStack, contextmanager
from typing import TYPE_CHECKING, Any, BinaryIO, Generic, TypeVar

from remote_paths._streams import RAW, StreamBuilder

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from contextlib import AbstractContextManager

    from remote_paths._types import PathLike

T = TypeVar("T")

_COPY_CHUNK_SIZE = 1024 * 1024


class Listing(Generic[T]):
    """Restartable lazy sequence.

    Each call to ``iter()`` runs ``factory`` again, so iterating twice
    performs the underlying enumeration twice and never resumes a previous
    cursor.
    """

    __slots__ = ("_factory",)

    def __init__(self, factory: Callable[[], Iterator[T]]) -> None:
        self._factory = factory

    def __iter__(self) -> Iterator[T]:
        return self._factory()

    def __repr__(self) -> str:
        return f"Listing({self._factory!r})"


class BasePath(abc.ABC):
    """Abstract base class for all paths.

    A path is an immutable address plus the operations a backend can perform
    on it. Subclasses provide the raw byte streams; this class layers the
    stream builder on top and supplies the generic streaming copy used when a
    backend has nothing better.

    :param builder: Stream builder applied by :meth:`reader` and
        :meth:`writer` unless ``convert=False``.
    """

    __slots__ = ("_builder",)

    scheme: str = ""

    def __init__(self, *, builder: StreamBuilder | None = None) -> None:
        object.__setattr__(self, "_builder", builder or RAW)

    @property
    def builder(self) -> StreamBuilder:
        """Stream builder used for converted reads and writes."""
        return self._builder

    # region: abstract contract

    @abc.abstractmethod
    def join(self, *elements: str) -> BasePath:
        """Return a new path with ``elements`` appended."""

    @abc.abstractmethod
    def relative(self) -> bool:
        """Return ``True`` if the path is relative to a working directory."""

    @abc.abstractmethod
    def exists(self) -> bool:
        """Check whether the path exists. Never raises for a missing path."""

    @abc.abstractmethod
    def size(self) -> int | None:
        """Size in bytes, or ``None`` if the path does not exist."""

    @abc.abstractmethod
    def delete(self) -> BasePath:
        """Delete the path. Deleting a missing path succeeds."""

    @abc.abstractmethod
    def mkpath(self) -> BasePath:
        """Ensure the parent location of this path exists."""

    @abc.abstractmethod
    def mkdir(self) -> BasePath:
        """Ensure this path exists as a directory."""

    @abc.abstractmethod
    def partial_files_visible(self) -> bool:
        """Return ``True`` if readers can observe a write before it completes."""

    @abc.abstractmethod
    def stream_reader(self, **options: Any) -> AbstractContextManager[BinaryIO]:
        """Open the raw bytes for reading, without conversions."""

    @abc.abstractmethod
    def stream_writer(self, **options: Any) -> AbstractContextManager[BinaryIO]:
        """Open a raw byte sink; the write is committed when the context exits cleanly."""

    # endregion

    # region: streams

    @contextmanager
    def reader(self, *, convert: bool = True, **options: Any) -> Iterator[BinaryIO]:
        """Open for reading through the stream builder.

        :param convert: Apply this path's builder; ``False`` yields raw bytes.
        :param options: Request options for this read only.
        """
        builder = self._builder if convert else RAW
        with ExitStack() as stack:
            raw = stack.enter_context(self.stream_reader(**options))
            yield stack.enter_context(builder.reader(raw))

    @contextmanager
    def writer(self, *, convert: bool = True, **options: Any) -> Iterator[BinaryIO]:
        """Open for writing through the stream builder.

        Nothing is committed if the block raises.

        :param convert: Apply this path's builder; ``False`` writes raw bytes.
        :param options: Request options for this write only.
        """
        builder = self._builder if convert else RAW
        with ExitStack() as stack:
            raw = stack.enter_context(self.stream_writer(**options))
            yield stack.enter_context(builder.writer(raw))

    def read(self, *, convert: bool = True, **options: Any) -> bytes:
        """Read the whole content."""
        with self.reader(convert=convert, **options) as stream:
            return stream.read()

    def write(self, data: bytes, *, convert: bool = True, **options: Any) -> BasePath:
        """Replace the whole content with ``data``."""
        with self.writer(convert=convert, **options) as stream:
            stream.write(data)
        return self

    # endregion

    # region: copy and move

    def copy_to(self, target: BasePath | PathLike, *, convert: bool = True, **options: Any) -> BasePath:
        """Stream this path's content into ``target``.

        :param target: Destination path or address.
        :param convert: Apply stream builders on both sides.
        :param options: Request options for the target write.
        :returns: The resolved target path.
        """
        from remote_paths._registry import resolve

        destination = resolve(target)
        stream_copy(self, destination, convert=convert, **options)
        return destination

    def copy_from(self, source: BasePath | PathLike, *, convert: bool = True, **options: Any) -> BasePath:
        """Stream ``source``'s content into this path.

        :param source: Source path or address.
        :param convert: Apply stream builders on both sides.
        :param options: Request options for this path's write.
        :returns: This path.
        """
        from remote_paths._registry import resolve

        stream_copy(resolve(source), self, convert=convert, **options)
        return self

    def move_to(self, target: BasePath | PathLike) -> BasePath:
        """Copy to ``target`` without conversions, then delete this path.

        The two steps are not atomic: a failure in between leaves both present.
        """
        destination = self.copy_to(target, convert=False)
        self.delete()
        return destination

    # endregion

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable: cannot set '{name}'")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable: cannot delete '{name}'")


def stream_copy(source: BasePath, target: BasePath, *, convert: bool = True, **options: Any) -> None:
    """Copy ``source`` into ``target`` through the local process.

    The source is opened first, so a missing source fails before the target
    write starts.
    """
    with source.reader(convert=convert) as src, target.writer(convert=convert, **options) as dst:
        shutil.copyfileobj(src, dst, _COPY_CHUNK_SIZE)
