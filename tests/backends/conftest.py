"""Backend test fixtures -- S3 served by moto's in-process mock."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

REGION = "us-east-1"


def _s3_available() -> bool:
    try:
        import boto3  # noqa: F401
        import moto  # noqa: F401

        return True
    except ImportError:
        return False


@pytest.fixture()
def s3_client() -> Iterator[Any]:
    """A boto3 S3 client talking to moto's mock S3 service."""
    if not _s3_available():
        pytest.skip("moto/boto3 not installed")
    import boto3
    from moto import mock_aws

    with mock_aws():
        yield boto3.client("s3", region_name=REGION)


@pytest.fixture()
def bucket(s3_client: Any) -> str:
    """A fresh, empty bucket."""
    name = f"test-{uuid.uuid4().hex[:8]}"
    s3_client.create_bucket(Bucket=name)
    return name


@pytest.fixture()
def other_bucket(s3_client: Any) -> str:
    """A second bucket for cross-container copies."""
    name = f"other-{uuid.uuid4().hex[:8]}"
    s3_client.create_bucket(Bucket=name)
    return name


class CallRecorder:
    """Counts calls to client methods while delegating to the real ones."""

    def __init__(self) -> None:
        self.calls: dict[str, int] = {}
        self.kwargs: dict[str, dict[str, Any]] = {}

    def count(self, name: str) -> int:
        return self.calls.get(name, 0)

    def wrap(self, monkeypatch: pytest.MonkeyPatch, client: Any, name: str) -> None:
        original: Callable[..., Any] = getattr(client, name)

        def recorded(*args: Any, **kwargs: Any) -> Any:
            self.calls[name] = self.calls.get(name, 0) + 1
            self.kwargs[name] = kwargs
            return original(*args, **kwargs)

        monkeypatch.setattr(client, name, recorded)


@pytest.fixture()
def recorder(monkeypatch: pytest.MonkeyPatch, s3_client: Any) -> CallRecorder:
    """Records calls to the S3 client operations used by S3Path."""
    rec = CallRecorder()
    for name in (
        "head_object",
        "put_object",
        "copy_object",
        "delete_object",
        "list_objects_v2",
        "download_fileobj",
        "create_multipart_upload",
        "upload_part",
        "complete_multipart_upload",
        "abort_multipart_upload",
    ):
        rec.wrap(monkeypatch, s3_client, name)
    return rec
