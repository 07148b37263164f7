"""Multipart upload of a local file to S3.

The file is split into fixed-size parts which are uploaded concurrently and
assembled server-side. If any part fails, the upload is aborted so no
partial object or orphaned parts remain, and :class:`PartialUploadFailure`
reports every failed part.
"""

from __future__ import annotations

import logging
import math
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING, Any

from remote_paths import _options
from remote_paths._errors import PartialUploadFailure

if TYPE_CHECKING:
    from collections.abc import Mapping

log = logging.getLogger(__name__)

# S3 rejects parts below 5 MiB (except the last) and uploads above 10,000 parts.
MIN_PART_SIZE = 5 * 1024 * 1024
MAX_PARTS = 10_000


def part_size_for(file_size: int, part_size: int) -> int:
    """Effective part size: at least the S3 minimum, and large enough to stay within ``MAX_PARTS``."""
    return max(part_size, MIN_PART_SIZE, math.ceil(file_size / MAX_PARTS))


class MultipartUpload:
    """Upload one local file as a multipart object.

    :param client: boto3 S3 client.
    :param bucket: Target container.
    :param key: Target key.
    :param options: Path options; each S3 call receives the subset it accepts.
    :param part_size: Requested part size in bytes.
    :param max_workers: Number of parts uploaded concurrently.
    """

    def __init__(
        self,
        client: Any,
        bucket: str,
        key: str,
        options: Mapping[str, Any],
        *,
        part_size: int,
        max_workers: int = 4,
    ) -> None:
        self._client = client
        self._bucket = bucket
        self._key = key
        self._options = dict(options)
        self._part_size = part_size
        self._max_workers = max(1, max_workers)
        algorithm = _options.translate(self._options).get("ChecksumAlgorithm")
        self._checksum_member = f"Checksum{str(algorithm).upper()}" if algorithm else None

    def upload(self, file_name: str) -> dict[str, Any]:
        """Upload ``file_name`` and return the completion response.

        :raises PartialUploadFailure: If one or more parts failed.
        """
        file_size = os.path.getsize(file_name)
        part_size = part_size_for(file_size, self._part_size)
        count = max(1, math.ceil(file_size / part_size))
        response = self._client.create_multipart_upload(
            Bucket=self._bucket, Key=self._key, **_options.create_upload_args(self._options)
        )
        upload_id = response["UploadId"]
        log.debug(
            "Multipart upload %s of %d bytes to s3://%s/%s in %d parts",
            upload_id,
            file_size,
            self._bucket,
            self._key,
            count,
        )
        try:
            parts = self._upload_parts(file_name, upload_id, part_size, count)
            return self._client.complete_multipart_upload(
                Bucket=self._bucket,
                Key=self._key,
                UploadId=upload_id,
                MultipartUpload={"Parts": parts},
                **_options.select(self._options, _options.COMPLETE_UPLOAD_ARGS),
            )
        except BaseException:
            self._abort(upload_id)
            raise

    def _upload_parts(self, file_name: str, upload_id: str, part_size: int, count: int) -> list[dict[str, Any]]:
        completed: dict[int, dict[str, Any]] = {}
        errors: dict[int, BaseException] = {}
        with ThreadPoolExecutor(max_workers=min(self._max_workers, count)) as pool:
            futures = {
                pool.submit(self._upload_part, file_name, upload_id, number, (number - 1) * part_size, part_size): number
                for number in range(1, count + 1)
            }
            for future in as_completed(futures):
                number = futures[future]
                error = future.exception()
                if error is None:
                    completed[number] = future.result()
                else:
                    errors[number] = error
        if errors:
            raise PartialUploadFailure(
                f"Multipart upload aborted: {len(errors)} of {count} parts failed",
                path=f"s3://{self._bucket}/{self._key}",
                backend="s3",
                errors=errors,
            )
        return [completed[number] for number in sorted(completed)]

    def _upload_part(self, file_name: str, upload_id: str, number: int, offset: int, length: int) -> dict[str, Any]:
        with open(file_name, "rb") as file:
            file.seek(offset)
            body = file.read(length)
        response = self._client.upload_part(
            Bucket=self._bucket,
            Key=self._key,
            UploadId=upload_id,
            PartNumber=number,
            Body=body,
            **_options.select(self._options, _options.UPLOAD_PART_ARGS),
        )
        part = {"PartNumber": number, "ETag": response["ETag"]}
        if self._checksum_member and response.get(self._checksum_member):
            part[self._checksum_member] = response[self._checksum_member]
        return part

    def _abort(self, upload_id: str) -> None:
        """Abort the upload; a failed abort is logged so the original error still propagates."""
        log.warning("Aborting multipart upload %s to s3://%s/%s", upload_id, self._bucket, self._key)
        try:
            self._client.abort_multipart_upload(
                Bucket=self._bucket,
                Key=self._key,
                UploadId=upload_id,
                **_options.select(self._options, _options.ABORT_UPLOAD_ARGS),
            )
        except Exception:
            log.exception("Could not abort multipart upload %s to s3://%s/%s", upload_id, self._bucket, self._key)
