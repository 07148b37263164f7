"""Path-like access to local files and S3 objects with staged streaming I/O."""

from remote_paths._config import ClientConfig
from remote_paths._errors import InvalidAddress, PartialUploadFailure, RemotePathError
from remote_paths._matcher import MatchSpec
from remote_paths._models import ObjectMetadata
from remote_paths._path import BasePath, Listing
from remote_paths._registry import register_scheme, registered_schemes, resolve
from remote_paths._streams import RAW, StreamBuilder, temp_file_name
from remote_paths.backends._local import FilePath
from remote_paths.backends._s3 import S3Path

__version__ = "0.1.0"

__all__ = [
    # Paths
    "BasePath",
    "S3Path",
    "FilePath",
    "Listing",
    "resolve",
    "register_scheme",
    "registered_schemes",
    # Streams
    "StreamBuilder",
    "RAW",
    "temp_file_name",
    # Matching & metadata
    "MatchSpec",
    "ObjectMetadata",
    # Config
    "ClientConfig",
    # Errors
    "RemotePathError",
    "InvalidAddress",
    "PartialUploadFailure",
    # Version
    "__version__",
]
