"""Type aliases used throughout remote_paths."""

from __future__ import annotations

import os  # noqa: TC003
from typing import Any, Union

PathLike = Union[str, "os.PathLike[str]"]  # noqa: UP007
ObjectEntry = dict[str, Any]
