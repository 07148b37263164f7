"""Immutable metadata models."""

from __future__ import annotations

import dataclasses
from datetime import datetime, timezone
from typing import Any

_KNOWN_FIELDS = frozenset(
    {"Key", "ContentLength", "Size", "LastModified", "ETag", "ContentType", "StorageClass", "ResponseMetadata"}
)


@dataclasses.dataclass(frozen=True)
class ObjectMetadata:
    """Immutable snapshot of an object's metadata.

    :param key: Object key within its container.
    :param size: Object size in bytes.
    :param modified_at: Last modification time, if reported.
    :param etag: Entity tag, quotes stripped.
    :param content_type: MIME type, if reported.
    :param storage_class: Storage class, if reported.
    :param extra: Remaining store-native fields.
    """

    key: str
    size: int
    modified_at: datetime | None = None
    etag: str | None = None
    content_type: str | None = None
    storage_class: str | None = None
    extra: dict[str, Any] = dataclasses.field(default_factory=dict)

    @classmethod
    def from_response(cls, response: dict[str, Any], *, key: str | None = None) -> ObjectMetadata:
        """Build from a ``head_object`` response or a ``list_objects_v2`` entry."""
        size = response.get("ContentLength", response.get("Size", 0)) or 0
        modified = response.get("LastModified")
        if isinstance(modified, str):
            modified = datetime.fromisoformat(modified)
        if modified is not None and modified.tzinfo is None:
            modified = modified.replace(tzinfo=timezone.utc)
        etag = response.get("ETag")
        return cls(
            key=key if key is not None else str(response.get("Key", "")),
            size=int(size),
            modified_at=modified,
            etag=etag.strip('"') if etag else None,
            content_type=response.get("ContentType"),
            storage_class=response.get("StorageClass"),
            extra={k: v for k, v in response.items() if k not in _KNOWN_FIELDS},
        )
