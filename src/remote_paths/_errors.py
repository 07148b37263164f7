"""Error hierarchy for remote_paths.

Only addressing and multipart failures are raised by this package itself.
Client-library errors (``botocore`` and friends) propagate unmodified.
"""

from __future__ import annotations

from typing import Optional


class RemotePathError(Exception):
    """Base class for all remote_paths errors.

    Subclasses add context by extending :meth:`_context`; it feeds both
    ``str()`` (``message | name=value ...``) and ``repr()``.

    :param message: Human-readable error description.
    :param path: The address involved in the error, if any.
    :param backend: The scheme involved, if any.
    """

    def __init__(self, message: str = "", *, path: Optional[str] = None, backend: Optional[str] = None) -> None:
        self.path = path
        self.backend = backend
        super().__init__(message)

    @property
    def message(self) -> str:
        return self.args[0] if self.args else ""

    def _context(self) -> list[tuple[str, object]]:
        return [(name, value) for name, value in (("path", self.path), ("backend", self.backend)) if value is not None]

    def __str__(self) -> str:
        return " | ".join([self.message, *(f"{name}={value!r}" for name, value in self._context())])

    def __repr__(self) -> str:
        args = ", ".join([repr(self.message), *(f"{name}={value!r}" for name, value in self._context())])
        return f"{type(self).__name__}({args})"


class InvalidAddress(RemotePathError):
    """Raised for a malformed URI, a wrong scheme, or an unregistered scheme."""


class PartialUploadFailure(RemotePathError):
    """Raised when a multipart upload was aborted because parts failed.

    :param errors: Mapping of failed part number to the exception it raised.
    """

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[str] = None,
        backend: Optional[str] = None,
        errors: Optional[dict[int, BaseException]] = None,
    ) -> None:
        self.errors = dict(errors or {})
        super().__init__(message, path=path, backend=backend)

    @property
    def failed_parts(self) -> list[int]:
        """Sorted part numbers that failed to upload."""
        return sorted(self.errors)

    def _context(self) -> list[tuple[str, object]]:
        context = super()._context()
        if self.errors:
            context.append(("failed_parts", self.failed_parts))
        return context
