"""S3 paths — object storage presented through the path contract, using boto3."""

from __future__ import annotations

import logging
import os
import threading
import types
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, BinaryIO

import boto3
from botocore.exceptions import ClientError

from remote_paths import _options
from remote_paths._config import ClientConfig
from remote_paths._errors import InvalidAddress
from remote_paths._matcher import MatchSpec
from remote_paths._models import ObjectMetadata
from remote_paths._path import BasePath, Listing
from remote_paths._registry import resolve
from remote_paths._streams import temp_file_name
from remote_paths._uri import normalize_option_name, parse_uri, scheme_of
from remote_paths.backends._multipart import MultipartUpload

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from remote_paths._streams import StreamBuilder
    from remote_paths._types import ObjectEntry, PathLike

log = logging.getLogger(__name__)

_NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


def _is_not_found(exc: ClientError) -> bool:
    return str(exc.response.get("Error", {}).get("Code", "")) in _NOT_FOUND_CODES


class S3Path(BasePath):
    """An object in an S3 container, addressed as ``s3://container/key``.

    S3 has no directories, no partial reads or writes and no rename, so this
    class stages transfers through local temporary files, picks between a
    single PUT and a multipart upload, copies server-side where it can, and
    enumerates children by listing keys under a prefix.

    :param uri: ``s3://container/key[?option=value&...]``.
    :param client: A boto3 S3 client used as-is, a :class:`ClientConfig`,
        or a dict of client parameters.
    :param access_key_id: AWS access key ID.
    :param secret_access_key: AWS secret access key.
    :param region: AWS region name.
    :param endpoint_url: Custom endpoint URL (e.g. for MinIO).
    :param builder: Stream builder for converted reads and writes.
    :param options: Request options such as ``acl``, ``storage_class``,
        ``content_type``, ``server_side_encryption`` or ``metadata``.
        Query parameters of ``uri`` override options of the same name.
    :raises InvalidAddress: If the scheme is not ``s3`` or the container is empty.
    """

    __slots__ = ("_container", "_key", "_options", "_client", "_client_config", "_lock")

    scheme = "s3"

    # Largest object the CopyObject API accepts.
    COPY_OBJECT_SIZE_LIMIT = 5 * 1024 * 1024 * 1024

    # Uploads larger than this use a multipart upload.
    MULTIPART_UPLOAD_SIZE = 5 * 1024 * 1024

    MULTIPART_PART_SIZE = 8 * 1024 * 1024
    MULTIPART_MAX_WORKERS = 4
    LIST_PAGE_SIZE = 1000

    def __init__(
        self,
        uri: str,
        *,
        client: Any = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        region: str | None = None,
        endpoint_url: str | None = None,
        builder: StreamBuilder | None = None,
        **options: Any,
    ) -> None:
        parsed = parse_uri(uri)
        if parsed.scheme != self.scheme:
            raise InvalidAddress(
                "Invalid URI. Required format: 's3://<container>/<key>'", path=uri, backend=self.scheme
            )
        if not parsed.host:
            raise InvalidAddress("URI has no container", path=uri, backend=self.scheme)

        handle: Any = None
        if isinstance(client, ClientConfig):
            config = client
        elif isinstance(client, dict):
            config = ClientConfig.from_dict(client)
        else:
            handle = client
            config = ClientConfig()
        config = config.merge(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            region=region,
            endpoint_url=endpoint_url,
        )

        merged = {normalize_option_name(k): v for k, v in options.items()}
        merged.update(parsed.query)

        key = parsed.path[1:] if parsed.path.startswith("/") else parsed.path

        super().__init__(builder=builder)
        self._bind(parsed.host, key, merged, handle, config)

    @classmethod
    def _from_parts(
        cls,
        container: str,
        key: str,
        options: Mapping[str, Any],
        *,
        client: Any,
        client_config: ClientConfig,
        builder: StreamBuilder,
    ) -> S3Path:
        path = object.__new__(cls)
        BasePath.__init__(path, builder=builder)
        path._bind(container, key, dict(options), client, client_config)
        return path

    def _bind(self, container: str, key: str, options: dict[str, Any], client: Any, config: ClientConfig) -> None:
        object.__setattr__(self, "_container", container)
        object.__setattr__(self, "_key", key)
        object.__setattr__(self, "_options", options)
        object.__setattr__(self, "_client", client)
        object.__setattr__(self, "_client_config", config)
        object.__setattr__(self, "_lock", threading.Lock())

    def _derive(self, key: str) -> S3Path:
        """A path to ``key`` in the same container sharing options and client binding."""
        return self._from_parts(
            self._container,
            key,
            self._options,
            client=self._client,
            client_config=self._client_config,
            builder=self._builder,
        )

    def _peer(self, other: BasePath | PathLike) -> BasePath:
        """Resolve ``other``; S3 addresses given as strings share this path's client binding."""
        if isinstance(other, str) and scheme_of(other) == self.scheme:
            return S3Path(other, client=self._client or self._client_config, builder=self._builder)
        return resolve(other)

    # region: identity

    @property
    def container(self) -> str:
        """The container (bucket) name."""
        return self._container

    @property
    def key(self) -> str:
        """The object key; empty for the container root."""
        return self._key

    @property
    def options(self) -> Mapping[str, Any]:
        """Read-only view of the request options."""
        return types.MappingProxyType(self._options)

    @property
    def client_config(self) -> ClientConfig:
        """Parameters used to build the client when none was supplied."""
        return self._client_config

    def __str__(self) -> str:
        if self._key:
            return f"{self.scheme}://{self._container}/{self._key}"
        return f"{self.scheme}://{self._container}"

    def __repr__(self) -> str:
        return f"S3Path({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, S3Path):
            return (self._container, self._key) == (other._container, other._key)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.scheme, self._container, self._key))

    def join(self, *elements: str) -> S3Path:
        parts = [p.strip("/") for p in (self._key, *elements)]
        return self._derive("/".join(p for p in parts if p))

    def relative(self) -> bool:
        """S3 paths are always absolute: there is no working directory."""
        return False

    # endregion

    # region: client

    @property
    def client(self) -> Any:
        """The boto3 S3 client, created on first use and cached."""
        if self._client is None:
            with self._lock:
                if self._client is None:
                    kwargs = self._client_config.client_kwargs()
                    log.info("Creating S3 client (endpoint=%s)", kwargs.get("endpoint_url", "default"))
                    object.__setattr__(self, "_client", boto3.client("s3", **kwargs))
        return self._client

    def _request_options(self, options: Mapping[str, Any]) -> dict[str, Any]:
        if not options:
            return self._options
        merged = dict(self._options)
        merged.update((normalize_option_name(k), v) for k, v in options.items())
        return merged

    # endregion

    # region: metadata

    def _head(self) -> ObjectEntry | None:
        """Fetch object metadata, or ``None`` when the object does not exist."""
        if not self._key:
            return None
        try:
            response = self.client.head_object(
                Bucket=self._container, Key=self._key, **_options.read_args(self._options)
            )
        except ClientError as exc:
            if _is_not_found(exc):
                return None
            raise
        response.pop("ResponseMetadata", None)
        return response

    def exists(self) -> bool:
        return self._head() is not None

    def size(self) -> int | None:
        head = self._head()
        if head is None:
            return None
        return int(head["ContentLength"])

    def metadata(self) -> ObjectMetadata | None:
        """Object metadata, or ``None`` if the object does not exist."""
        head = self._head()
        if head is None:
            return None
        return ObjectMetadata.from_response(head, key=self._key)

    def delete(self) -> S3Path:
        if not self._key:
            return self
        try:
            self.client.delete_object(Bucket=self._container, Key=self._key, **_options.delete_args(self._options))
        except ClientError as exc:
            if not _is_not_found(exc):
                raise
        return self

    def mkpath(self) -> S3Path:
        """No-op: keys imply their prefixes."""
        return self

    def mkdir(self) -> S3Path:
        """No-op: S3 has no directory entities."""
        return self

    def partial_files_visible(self) -> bool:
        """Only completed uploads become visible on S3."""
        return False

    # endregion

    # region: staged streams

    @contextmanager
    def stream_reader(self, **options: Any) -> Iterator[BinaryIO]:
        """Download the object into a temp file and yield it opened for reading."""
        with temp_file_name("remote_paths_s3") as file_name:
            self.read_file(file_name, **options)
            with open(file_name, "rb") as raw:
                yield raw

    def read_file(self, file_name: PathLike, **options: Any) -> None:
        """Download the object into a local file, without conversions."""
        args = _options.read_args(self._request_options(options))
        with open(file_name, "wb") as file:
            self.client.download_fileobj(self._container, self._key, file, ExtraArgs=args or None)

    @contextmanager
    def stream_writer(self, **options: Any) -> Iterator[BinaryIO]:
        """Yield a temp file for writing and upload it once the block completes."""
        with temp_file_name("remote_paths_s3") as file_name:
            with open(file_name, "wb") as raw:
                yield raw
            self.write_file(file_name, **options)

    def write_file(self, file_name: PathLike, **options: Any) -> None:
        """Upload a local file as the object's complete content, without conversions.

        :raises PartialUploadFailure: If a multipart upload had to be aborted.
        """
        request_options = self._request_options(options)
        size = os.path.getsize(file_name)
        if size > self.MULTIPART_UPLOAD_SIZE:
            log.debug("Uploading %d bytes to %s with a multipart upload", size, self)
            upload = MultipartUpload(
                self.client,
                self._container,
                self._key,
                request_options,
                part_size=self.MULTIPART_PART_SIZE,
                max_workers=self.MULTIPART_MAX_WORKERS,
            )
            upload.upload(os.fspath(file_name))
        else:
            log.debug("Uploading %d bytes to %s with a single PUT", size, self)
            with open(file_name, "rb") as body:
                self.client.put_object(
                    Bucket=self._container, Key=self._key, Body=body, **_options.put_args(request_options)
                )

    # endregion

    # region: copy and move

    def _server_side_copy(self, source: S3Path, target: S3Path, options: Mapping[str, Any]) -> None:
        log.debug("Server-side copy %s -> %s", source, target)
        self.client.copy_object(
            Bucket=target.container,
            Key=target.key,
            CopySource={"Bucket": source.container, "Key": source.key},
            **_options.copy_args(self._request_options(options)),
        )

    def copy_to(self, target: BasePath | PathLike, *, convert: bool = True, **options: Any) -> BasePath:
        """Copy to ``target``, server-side when both ends are S3.

        Falls back to a streaming copy through this process when ``convert``
        is requested, when the object is too large for CopyObject, or when
        ``target`` is not an S3 path.
        """
        if convert or (self.size() or 0) >= self.COPY_OBJECT_SIZE_LIMIT:
            return super().copy_to(self._peer(target), convert=convert, **options)

        destination = self._peer(target)
        if not isinstance(destination, S3Path):
            return super().copy_to(destination, convert=convert, **options)

        self._server_side_copy(self, destination, options)
        return destination

    def copy_from(self, source: BasePath | PathLike, *, convert: bool = True, **options: Any) -> BasePath:
        """Copy from ``source``, server-side when ``convert=False`` and both ends are S3."""
        origin = self._peer(source)
        if convert:
            return super().copy_from(origin, convert=True, **options)

        if not isinstance(origin, S3Path) or (origin.size() or 0) >= self.COPY_OBJECT_SIZE_LIMIT:
            return super().copy_from(origin, convert=convert, **options)

        self._server_side_copy(origin, self, options)
        return self

    # endregion

    # region: listing

    def each_child(
        self,
        pattern: str = "*",
        *,
        case_sensitive: bool = False,
        directories: bool = False,
        hidden: bool = False,
    ) -> Listing[tuple[S3Path, ObjectEntry]]:
        """Enumerate objects under this path matching ``pattern``.

        Returns a restartable lazy listing of ``(path, entry)`` pairs, where
        ``entry`` is the store's raw metadata for the object. Every iteration
        lists from scratch. S3 listings are always recursive, so ``*`` only
        differs from ``**/*`` through the pattern match itself.

        :param pattern: Glob relative to this path.
        :param case_sensitive: Match letter case exactly.
        :param directories: Include pseudo-directory marker keys (ending in ``/``).
        :param hidden: Let wildcards match names starting with ``.``.
        """
        return Listing(lambda: self._iter_children(pattern, case_sensitive, directories, hidden))

    def _iter_children(
        self, pattern: str, case_sensitive: bool, directories: bool, hidden: bool
    ) -> Iterator[tuple[S3Path, ObjectEntry]]:
        client = self.client
        spec = MatchSpec(self, pattern, case_sensitive=case_sensitive, hidden=hidden)
        base: S3Path = spec.path  # type: ignore[assignment]

        if spec.exact:
            head = base._head()
            if head is not None:
                yield base, head
            return

        # Keys like "data/" must not list under "data//".
        directory = base.key.rstrip("/")
        prefix = f"{directory}/" if directory else ""
        args = _options.list_args(self._options)
        token: str | None = None
        while True:
            request: dict[str, Any] = {"Bucket": self._container, "Prefix": prefix, "MaxKeys": self.LIST_PAGE_SIZE}
            if token:
                request["ContinuationToken"] = token
            page = client.list_objects_v2(**request, **args)
            for entry in page.get("Contents", []):
                key = entry["Key"]
                if key.endswith("/") and not directories:
                    continue
                if not spec.match(f"{self.scheme}://{self._container}/{key.rstrip('/')}"):
                    continue
                yield self._derive(key), entry
            token = page.get("NextContinuationToken")
            if not token:
                break

    # endregion
