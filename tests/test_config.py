"""Tests for courier.config — SendOptions defaults, validation and merging."""

import dataclasses

import pytest

from courier.config import SendOptions
from courier.errors import ConfigurationError


class TestDefaults:
    def test_defaults(self) -> None:
        options = SendOptions()
        assert options.root == ""
        assert options.hidden is False
        assert options.index is None
        assert options.format is True
        assert options.extensions is None
        assert options.max_age == 0
        assert options.immutable is False
        assert options.brotli is True
        assert options.gzip is True
        assert options.ranges is True
        assert options.set_headers is None

    def test_frozen(self) -> None:
        options = SendOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.root = "/tmp"  # type: ignore[misc]


class TestValidation:
    def test_extensions_normalized_to_tuple(self) -> None:
        assert SendOptions(extensions=["html", ".htm"]).extensions == ("html", ".htm")

    def test_extensions_false_is_none(self) -> None:
        assert SendOptions(extensions=False).extensions is None  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", ["html", 42, ["html", 1]])
    def test_bad_extensions(self, value) -> None:
        with pytest.raises(ConfigurationError, match="extensions"):
            SendOptions(extensions=value)

    @pytest.mark.parametrize("value", [False, ""])
    def test_index_disabled(self, value) -> None:
        assert SendOptions(index=value).index is None

    def test_bad_index(self) -> None:
        with pytest.raises(ConfigurationError, match="index"):
            SendOptions(index=1)  # type: ignore[arg-type]

    def test_set_headers_must_be_callable(self) -> None:
        with pytest.raises(ConfigurationError, match="set_headers"):
            SendOptions(set_headers="nope")  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", [-1, "60", True, None])
    def test_bad_max_age(self, value) -> None:
        with pytest.raises(ConfigurationError, match="max_age"):
            SendOptions(max_age=value)

    def test_configuration_error_is_500(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            SendOptions(max_age=-5)
        assert exc_info.value.status == 500


class TestMerge:
    def test_override(self) -> None:
        base = SendOptions(root="public", index="index.html")
        merged = base.merge(index="default.html", max_age=1000)
        assert merged.root == "public"
        assert merged.index == "default.html"
        assert merged.max_age == 1000
        assert base.index == "index.html"

    def test_no_overrides_returns_same(self) -> None:
        base = SendOptions()
        assert base.merge() is base

    @pytest.mark.parametrize("key", ["maxage", "maxAge"])
    def test_max_age_aliases(self, key) -> None:
        assert SendOptions.from_kwargs(**{key: 5000}).max_age == 5000

    def test_set_headers_alias(self) -> None:
        def callback(headers, path, stat):
            pass

        assert SendOptions.from_kwargs(setHeaders=callback).set_headers is callback

    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigurationError, match="colour"):
            SendOptions.from_kwargs(colour="blue")

    def test_merge_revalidates(self) -> None:
        with pytest.raises(ConfigurationError):
            SendOptions().merge(max_age=-1)


class TestCacheControl:
    def test_zero(self) -> None:
        assert SendOptions().cache_control == "max-age=0"

    def test_milliseconds_truncated_to_seconds(self) -> None:
        assert SendOptions(max_age=1999).cache_control == "max-age=1"

    def test_immutable(self) -> None:
        options = SendOptions(max_age=31_536_000_000, immutable=True)
        assert options.cache_control == "max-age=31536000,immutable"
