"""Quickstart — write, read, copy and list with remote-paths.

Demonstrates:
- Addressing objects with ``s3://`` URIs and local file names
- Staged writes and reads
- Server-side copies and glob listing

Point ``ENDPOINT`` at any S3-compatible service (e.g. a local MinIO).
"""

from __future__ import annotations

import logging
import tempfile

from remote_paths import ClientConfig, S3Path, resolve

ENDPOINT = "http://localhost:9000"

if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)

    config = ClientConfig(
        access_key_id="minioadmin",
        secret_access_key="minioadmin",
        region="us-east-1",
        endpoint_url=ENDPOINT,
    )
    data = S3Path("s3://demo/data", client=config, content_type="text/csv")

    # Write and read back
    report = data.join("2024", "report.csv")
    report.write(b"id,value\n1,42\n")
    print(f"{report} exists: {report.exists()}, size: {report.size()}")
    print(report.read().decode())

    # Copy server-side, then move
    backup = report.copy_to("s3://demo/backup/report.csv", convert=False)
    print(f"Copied to {backup}")
    archived = backup.move_to("s3://demo/archive/report.csv")
    print(f"Moved to {archived}; {backup} exists: {backup.exists()}")

    # List everything below data/ matching a glob
    for path, entry in data.each_child("**/*.csv"):
        print(f"  {path}  {entry['Size']} bytes")

    # Download to a local file
    with tempfile.TemporaryDirectory() as tmp:
        local = report.copy_to(f"{tmp}/report.csv", convert=False)
        print(f"Downloaded to {local}: {resolve(str(local)).read()!r}")
