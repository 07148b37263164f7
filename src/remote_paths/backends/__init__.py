"""Path backend implementations."""

from remote_paths.backends._local import FilePath
from remote_paths.backends._s3 import S3Path

__all__ = ["FilePath", "S3Path"]
