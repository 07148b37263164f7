"""Error handling — addressing errors, missing objects and aborted uploads.

remote-paths raises its own errors for bad addresses and aborted multipart
uploads. Everything the S3 client reports (missing keys, permissions, ...)
propagates as ``botocore.exceptions.ClientError``.
"""

from __future__ import annotations

from botocore.exceptions import ClientError

from remote_paths import InvalidAddress, PartialUploadFailure, RemotePathError, S3Path

ENDPOINT = "http://localhost:9000"

if __name__ == "__main__":
    try:
        S3Path("gs://bucket/key")
    except InvalidAddress as exc:
        print(f"Bad address: {exc}")

    path = S3Path("s3://demo/missing.txt", client={"endpoint_url": ENDPOINT})

    # Queries never raise for a missing object
    print(f"exists: {path.exists()}, size: {path.size()}")

    try:
        path.read()
    except ClientError as exc:
        print(f"Read failed: {exc.response['Error']['Code']}")

    try:
        path.join("big.bin").write(b"x" * (64 * 1024 * 1024))
    except PartialUploadFailure as exc:
        print(f"Upload aborted, failed parts: {exc.failed_parts}")
    except RemotePathError as exc:
        print(f"Other remote_paths error: {exc}")
