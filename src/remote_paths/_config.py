"""Client configuration — immutable container describing how to build an S3 client."""

from __future__ import annotations

import dataclasses
from typing import Any

_FIELD_ALIASES = {
    "aws_access_key_id": "access_key_id",
    "aws_secret_access_key": "secret_access_key",
    "aws_session_token": "session_token",
    "region_name": "region",
}


@dataclasses.dataclass(frozen=True)
class ClientConfig:
    """Parameters for constructing a boto3 S3 client.

    Fields left as ``None`` fall back to boto3's default credential and
    region resolution (environment, shared config files, instance roles).

    :param access_key_id: AWS access key ID.
    :param secret_access_key: AWS secret access key.
    :param session_token: Temporary session token.
    :param region: AWS region name.
    :param endpoint_url: Custom endpoint URL (e.g. for MinIO).
    :param options: Extra keyword arguments passed verbatim to ``boto3.client``.
    """

    access_key_id: str | None = None
    secret_access_key: str | None = None
    session_token: str | None = None
    region: str | None = None
    endpoint_url: str | None = None
    options: dict[str, Any] = dataclasses.field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClientConfig:
        """Construct from a plain dict.

        Accepts both the field names and the boto3 spellings
        (``aws_access_key_id``, ``region_name``, ...). Unrecognised keys are
        kept in ``options``.

        :param data: Client parameters.
        """
        if not isinstance(data, dict):
            msg = f"Client parameters must be a dict, got {type(data).__name__}"
            raise TypeError(msg)
        names = {f.name for f in dataclasses.fields(cls)} - {"options"}
        fields: dict[str, Any] = {}
        options: dict[str, Any] = dict(data.get("options", {}))
        for key, value in data.items():
            if key == "options":
                continue
            name = _FIELD_ALIASES.get(key, key)
            if name in names:
                fields[name] = value
            else:
                options[key] = value
        return cls(options=options, **fields)

    def merge(self, **overrides: Any) -> ClientConfig:
        """Return a copy with every non-``None`` override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return dataclasses.replace(self, **changes)

    def client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``boto3.client("s3", ...)``."""
        kwargs: dict[str, Any] = dict(self.options)
        if self.access_key_id is not None:
            kwargs["aws_access_key_id"] = self.access_key_id
        if self.secret_access_key is not None:
            kwargs["aws_secret_access_key"] = self.secret_access_key
        if self.session_token is not None:
            kwargs["aws_session_token"] = self.session_token
        if self.region is not None:
            kwargs["region_name"] = self.region
        if self.endpoint_url is not None:
            kwargs["endpoint_url"] = self.endpoint_url
        return kwargs
