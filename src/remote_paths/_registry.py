"""Registry — maps URI schemes to path classes."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

from remote_paths._errors import InvalidAddress
from remote_paths._uri import scheme_of

if TYPE_CHECKING:
    from remote_paths._path import BasePath
    from remote_paths._types import PathLike

# Global scheme registry: maps URI schemes to path classes.
_PATH_FACTORIES: dict[str, type[BasePath]] = {}


def register_scheme(scheme: str, cls: type[BasePath]) -> None:
    """Register a path class for a URI scheme.

    :param scheme: The scheme (e.g. ``"s3"``), matched case-insensitively.
    :param cls: The path class; constructed as ``cls(uri, **kwargs)``.
    """
    _PATH_FACTORIES[scheme.lower()] = cls


def registered_schemes() -> list[str]:
    """Sorted list of registered schemes."""
    _register_builtin_schemes()
    return sorted(_PATH_FACTORIES)


def _register_builtin_schemes() -> None:
    """Register the built-in path classes."""
    from remote_paths.backends._local import FilePath
    from remote_paths.backends._s3 import S3Path

    if "file" not in _PATH_FACTORIES:
        register_scheme("file", FilePath)
    if "s3" not in _PATH_FACTORIES:
        register_scheme("s3", S3Path)


def resolve(target: BasePath | PathLike, **kwargs: Any) -> BasePath:
    """Return a path for ``target``.

    Path instances are returned unchanged. Strings are dispatched on their
    URI scheme; a string without a scheme (or a Windows drive letter) is a
    local file name.

    :param target: A path instance, URI, or local file name.
    :param kwargs: Passed to the path class constructor.
    :raises InvalidAddress: If the scheme is not registered.
    """
    from remote_paths._path import BasePath

    if isinstance(target, BasePath):
        return target
    _register_builtin_schemes()
    text = os.fspath(target)
    scheme = scheme_of(text)
    if len(scheme) <= 1:
        scheme = "file"
    if scheme not in _PATH_FACTORIES:
        raise InvalidAddress(
            f"Unknown scheme '{scheme}'. Registered schemes: {sorted(_PATH_FACTORIES)}",
            path=text,
        )
    return _PATH_FACTORIES[scheme](text, **kwargs)
