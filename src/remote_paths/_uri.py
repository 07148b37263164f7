"""URI parsing for backend addresses."""

from __future__ import annotations

import dataclasses
from urllib.parse import parse_qsl, unquote, urlsplit

from remote_paths._errors import InvalidAddress


def normalize_option_name(name: str) -> str:
    """Normalize an option name: lower-case, dashes to underscores."""
    return name.strip().lower().replace("-", "_")


@dataclasses.dataclass(frozen=True)
class ParsedURI:
    """Components of a ``scheme://host/path?query`` address.

    :param scheme: Lower-cased scheme, empty when the URI has none.
    :param host: Network location, case preserved.
    :param path: Percent-decoded path, including its leading separator.
    :param query: Query parameters with normalized names, in URI order.
    """

    scheme: str
    host: str
    path: str
    query: dict[str, str] = dataclasses.field(default_factory=dict)


def parse_uri(uri: str) -> ParsedURI:
    """Split a URI into its components.

    Repeated query parameters keep their last value.

    :raises InvalidAddress: If ``uri`` is not a string or contains a null byte.
    """
    if not isinstance(uri, str):
        raise InvalidAddress(f"URI must be a string, got {type(uri).__name__}")
    if "\0" in uri:
        raise InvalidAddress("URI contains null byte", path=uri)
    parts = urlsplit(uri)
    query = {normalize_option_name(k): v for k, v in parse_qsl(parts.query, keep_blank_values=True)}
    return ParsedURI(
        scheme=parts.scheme.lower(),
        host=parts.netloc,
        path=unquote(parts.path),
        query=query,
    )


def scheme_of(uri: str) -> str:
    """Return the lower-cased scheme of ``uri`` (empty when absent)."""
    return urlsplit(uri).scheme.lower()
