"""Request options — snake_case path options to S3 request parameters.

Paths carry options such as ``acl``, ``storage_class`` or
``server_side_encryption``. Each S3 call accepts a different subset, so every
call selects the options it understands and translates their names to the
client library's parameter names (``ACL``, ``StorageClass``, ...).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

_ACRONYMS = {
    "acl": "ACL",
    "acp": "ACP",
    "md5": "MD5",
    "sse": "SSE",
    "kms": "KMS",
    "ssekms": "SSEKMS",
    "mfa": "MFA",
    "crc32": "CRC32",
    "crc32c": "CRC32C",
    "sha1": "SHA1",
    "sha256": "SHA256",
}

READ_ARGS = frozenset(
    {
        "VersionId",
        "SSECustomerAlgorithm",
        "SSECustomerKey",
        "SSECustomerKeyMD5",
        "RequestPayer",
        "ExpectedBucketOwner",
        "ChecksumMode",
    }
)

DELETE_ARGS = frozenset({"VersionId", "MFA", "RequestPayer", "BypassGovernanceRetention", "ExpectedBucketOwner"})

LIST_ARGS = frozenset({"RequestPayer", "ExpectedBucketOwner"})

UPLOAD_PART_ARGS = frozenset(
    {
        "SSECustomerAlgorithm",
        "SSECustomerKey",
        "SSECustomerKeyMD5",
        "RequestPayer",
        "ExpectedBucketOwner",
        "ChecksumAlgorithm",
    }
)

COMPLETE_UPLOAD_ARGS = frozenset(
    {"SSECustomerAlgorithm", "SSECustomerKey", "SSECustomerKeyMD5", "RequestPayer", "ExpectedBucketOwner"}
)

ABORT_UPLOAD_ARGS = frozenset({"RequestPayer", "ExpectedBucketOwner"})

# Selectors for reads/deletes and copy-only directives never go to a PUT.
_NOT_FOR_WRITE = frozenset(
    {"VersionId", "ChecksumMode", "MFA", "BypassGovernanceRetention", "MetadataDirective", "TaggingDirective"}
)
_NOT_FOR_MULTIPART = _NOT_FOR_WRITE | {"ContentMD5", "ContentLength"}
_NOT_FOR_COPY = frozenset({"VersionId", "ChecksumMode", "MFA", "BypassGovernanceRetention", "ContentMD5", "ContentLength"})


def request_name(name: str) -> str:
    """Translate an option name to its S3 request parameter name.

    ``server_side_encryption`` becomes ``ServerSideEncryption``,
    ``sse_customer_key_md5`` becomes ``SSECustomerKeyMD5``. Names that are
    already CamelCase are returned unchanged.
    """
    if "_" not in name and name[:1].isupper():
        return name
    return "".join(_ACRONYMS.get(word, word.capitalize()) for word in name.lower().split("_") if word)


def translate(options: Mapping[str, Any]) -> dict[str, Any]:
    """Translate every option name, preserving order."""
    return {request_name(k): v for k, v in options.items()}


def select(options: Mapping[str, Any], allowed: frozenset[str]) -> dict[str, Any]:
    """Translated options restricted to ``allowed`` request parameters."""
    return {k: v for k, v in translate(options).items() if k in allowed}


def exclude(options: Mapping[str, Any], excluded: frozenset[str]) -> dict[str, Any]:
    """Translated options minus ``excluded`` request parameters."""
    return {k: v for k, v in translate(options).items() if k not in excluded}


def read_args(options: Mapping[str, Any]) -> dict[str, Any]:
    """Parameters for ``head_object`` and downloads."""
    return select(options, READ_ARGS)


def delete_args(options: Mapping[str, Any]) -> dict[str, Any]:
    """Parameters for ``delete_object``."""
    return select(options, DELETE_ARGS)


def list_args(options: Mapping[str, Any]) -> dict[str, Any]:
    """Parameters for ``list_objects_v2``."""
    return select(options, LIST_ARGS)


def put_args(options: Mapping[str, Any]) -> dict[str, Any]:
    """Parameters for ``put_object``; unknown names are kept so the client rejects them."""
    return exclude(options, _NOT_FOR_WRITE)


def create_upload_args(options: Mapping[str, Any]) -> dict[str, Any]:
    """Parameters for ``create_multipart_upload``."""
    return exclude(options, _NOT_FOR_MULTIPART)


def copy_args(options: Mapping[str, Any]) -> dict[str, Any]:
    """Parameters for ``copy_object``."""
    return exclude(options, _NOT_FOR_COPY)
