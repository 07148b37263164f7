"""Tests for URI parsing and S3 path addressing."""

from __future__ import annotations

import pytest

from remote_paths._config import ClientConfig
from remote_paths._errors import InvalidAddress
from remote_paths._uri import normalize_option_name, parse_uri, scheme_of
from remote_paths.backends._s3 import S3Path


class TestParseUri:
    def test_components(self) -> None:
        parsed = parse_uri("s3://bucket/dir/file.txt?x=1")
        assert parsed.scheme == "s3"
        assert parsed.host == "bucket"
        assert parsed.path == "/dir/file.txt"
        assert parsed.query == {"x": "1"}

    def test_scheme_lowercased(self) -> None:
        assert parse_uri("S3://bucket/k").scheme == "s3"

    def test_path_percent_decoded(self) -> None:
        assert parse_uri("s3://bucket/a%20b.txt").path == "/a b.txt"

    def test_query_names_normalized(self) -> None:
        parsed = parse_uri("s3://b/k?Storage-Class=GLACIER&acl=private")
        assert parsed.query == {"storage_class": "GLACIER", "acl": "private"}

    def test_blank_query_value_kept(self) -> None:
        assert parse_uri("s3://b/k?flag=").query == {"flag": ""}

    def test_null_byte_rejected(self) -> None:
        with pytest.raises(InvalidAddress):
            parse_uri("s3://b/a\0b")

    def test_non_string_rejected(self) -> None:
        with pytest.raises(InvalidAddress):
            parse_uri(42)  # type: ignore[arg-type]

    def test_scheme_of(self) -> None:
        assert scheme_of("s3://b/k") == "s3"
        assert scheme_of("/tmp/file") == ""

    def test_normalize_option_name(self) -> None:
        assert normalize_option_name(" Content-Type ") == "content_type"


class TestS3PathAddressing:
    def test_container_key_and_query_options(self) -> None:
        path = S3Path("s3://c/k?x=1")
        assert path.container == "c"
        assert path.key == "k"
        assert path.options["x"] == "1"

    def test_nested_key(self) -> None:
        path = S3Path("s3://my-bucket/some_path/file_name.csv")
        assert path.container == "my-bucket"
        assert path.key == "some_path/file_name.csv"

    def test_container_root(self) -> None:
        path = S3Path("s3://my-bucket")
        assert path.key == ""
        assert str(path) == "s3://my-bucket"

    def test_str_round_trip(self) -> None:
        assert str(S3Path("s3://b/a/b.txt")) == "s3://b/a/b.txt"

    def test_wrong_scheme_raises(self) -> None:
        with pytest.raises(InvalidAddress, match="s3://"):
            S3Path("gs://bucket/key")

    def test_missing_scheme_raises(self) -> None:
        with pytest.raises(InvalidAddress):
            S3Path("/local/file.txt")

    def test_empty_container_raises(self) -> None:
        with pytest.raises(InvalidAddress, match="container"):
            S3Path("s3:///key")

    def test_keyword_options_normalized(self) -> None:
        path = S3Path("s3://b/k", ACL="private", storage_class="STANDARD_IA")
        assert dict(path.options) == {"acl": "private", "storage_class": "STANDARD_IA"}

    def test_query_overrides_keyword_option(self) -> None:
        path = S3Path("s3://b/k?storage_class=GLACIER", storage_class="STANDARD")
        assert path.options["storage_class"] == "GLACIER"

    def test_options_read_only(self) -> None:
        path = S3Path("s3://b/k", acl="private")
        with pytest.raises(TypeError):
            path.options["acl"] = "public-read"  # type: ignore[index]

    def test_never_relative(self) -> None:
        assert S3Path("s3://b/k").relative() is False

    def test_immutable(self) -> None:
        path = S3Path("s3://b/k")
        with pytest.raises(AttributeError, match="immutable"):
            path.key = "other"  # type: ignore[misc]

    def test_equality_ignores_options(self) -> None:
        assert S3Path("s3://b/k", acl="private") == S3Path("s3://b/k")
        assert hash(S3Path("s3://b/k")) == hash(S3Path("s3://b/k?x=1"))
        assert S3Path("s3://b/k") != S3Path("s3://other/k")

    def test_repr(self) -> None:
        assert repr(S3Path("s3://b/k")) == "S3Path('s3://b/k')"


class TestJoin:
    def test_join_elements(self) -> None:
        assert str(S3Path("s3://b/data").join("a", "b.txt")) == "s3://b/data/a/b.txt"

    def test_join_from_root(self) -> None:
        assert str(S3Path("s3://b").join("x.txt")) == "s3://b/x.txt"

    def test_join_collapses_separators(self) -> None:
        assert S3Path("s3://b/data/").join("/x/").key == "data/x"

    def test_join_keeps_options(self) -> None:
        child = S3Path("s3://b/data", acl="private").join("x")
        assert child.options["acl"] == "private"


class TestClientBinding:
    def test_construction_makes_no_client(self) -> None:
        path = S3Path("s3://b/k", endpoint_url="http://localhost:1")
        assert path._client is None

    def test_explicit_parameters_fill_config(self) -> None:
        path = S3Path("s3://b/k", access_key_id="AK", secret_access_key="SK", region="eu-west-1")
        assert path.client_config == ClientConfig(access_key_id="AK", secret_access_key="SK", region="eu-west-1")

    def test_dict_client_becomes_config(self) -> None:
        path = S3Path("s3://b/k", client={"endpoint_url": "http://minio:9000"}, region="us-west-2")
        assert path.client_config.endpoint_url == "http://minio:9000"
        assert path.client_config.region == "us-west-2"

    def test_prebuilt_client_used_as_is(self) -> None:
        sentinel = object()
        path = S3Path("s3://b/k", client=sentinel)
        assert path.client is sentinel

    def test_client_created_once(self, monkeypatch: pytest.MonkeyPatch) -> None:
        import remote_paths.backends._s3 as s3_module

        created: list[dict[str, object]] = []

        def fake_client(service: str, **kwargs: object) -> object:
            created.append(kwargs)
            return object()

        monkeypatch.setattr(s3_module.boto3, "client", fake_client)
        path = S3Path("s3://b/k", region="eu-central-1")
        first = path.client
        assert path.client is first
        assert created == [{"region_name": "eu-central-1"}]

    def test_joined_path_does_not_force_client(self) -> None:
        path = S3Path("s3://b/data")
        child = path.join("x")
        assert path._client is None
        assert child._client is None
        assert child.client_config is path.client_config

    def test_joined_path_shares_built_client(self) -> None:
        sentinel = object()
        assert S3Path("s3://b/data", client=sentinel).join("x").client is sentinel
