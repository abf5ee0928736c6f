"""
Unit tests for HashConfiguration and the Component flags.
"""

from __future__ import annotations

import pytest

from urlseal.core.errors import ConfigurationError
from urlseal.signing.config import (
    DEFAULT_COMPONENTS,
    Component,
    HashConfiguration,
    coerce_components,
)


class TestDefaults:
    def test_create_uses_defaults(self) -> None:
        config = HashConfiguration.create("secure-key")

        assert config.key == "secure-key"
        assert config.signature_key == "_signature"
        assert config.timeout_key == "_expires"
        assert config.algorithm == "sha256"
        assert config.components == Component.HOST | Component.PATH | Component.QUERY

    def test_default_mask_bits(self) -> None:
        assert DEFAULT_COMPONENTS.value == 2 | 8 | 16

    def test_defaults_come_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from urlseal.core.settings import reset_settings_cache

        monkeypatch.setenv("URLSEAL_SIGNING__SIGNATURE_KEY", "sig")
        monkeypatch.setenv("URLSEAL_SIGNING__ALGORITHM", "sha512")
        reset_settings_cache()

        config = HashConfiguration.create("k")
        assert config.signature_key == "sig"
        assert config.timeout_key == "_expires"
        assert config.algorithm == "sha512"

    def test_key_is_hidden_from_repr(self) -> None:
        assert "secure-key" not in repr(HashConfiguration.create("secure-key"))

    def test_bytes_key_is_kept(self) -> None:
        assert HashConfiguration(b"\x00\xff").key == b"\x00\xff"


@pytest.mark.critical
class TestKeyCollision:
    def test_same_keys_at_construction(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            HashConfiguration("secure-key", "x", "x")
        assert 'The URL key "x" was defined for the signature AND the timeout' in str(
            exc_info.value
        )

    def test_signature_key_assignment(self) -> None:
        config = HashConfiguration.create("k")
        with pytest.raises(ConfigurationError):
            config.signature_key = "_expires"
        assert config.signature_key == "_signature"

    def test_timeout_key_assignment(self) -> None:
        config = HashConfiguration.create("k")
        with pytest.raises(ConfigurationError):
            config.timeout_key = "_signature"
        assert config.timeout_key == "_expires"

    def test_non_colliding_assignment(self) -> None:
        config = HashConfiguration.create("k")
        config.signature_key = "s"
        config.timeout_key = "t"
        assert (config.signature_key, config.timeout_key) == ("s", "t")


class TestAlgorithm:
    def test_lookup_is_case_insensitive(self) -> None:
        assert HashConfiguration("k", algorithm="SHA512").algorithm == "sha512"

    def test_unknown_algorithm_at_construction(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            HashConfiguration("k", algorithm="iDoNotExist")
        assert 'The hash algorithm "iDoNotExist" is not available' in str(
            exc_info.value
        )

    def test_unknown_default_algorithm_from_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from urlseal.core.settings import reset_settings_cache

        monkeypatch.setenv("URLSEAL_SIGNING__ALGORITHM", "bogus")
        reset_settings_cache()

        with pytest.raises(ConfigurationError) as exc_info:
            HashConfiguration.create("k")
        assert 'The hash algorithm "bogus" is not available' in str(exc_info.value)

    def test_default_algorithm_from_environment_is_normalized(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from urlseal.core.settings import reset_settings_cache

        monkeypatch.setenv("URLSEAL_SIGNING__ALGORITHM", "SHA512")
        reset_settings_cache()

        assert HashConfiguration.create("k").algorithm == "sha512"

    def test_unknown_algorithm_on_assignment(self) -> None:
        config = HashConfiguration.create("k")
        with pytest.raises(ConfigurationError):
            config.algorithm = "iDoNotExist"
        assert config.algorithm == "sha256"


class TestComponents:
    def test_accepts_names_and_iterables(self) -> None:
        config = HashConfiguration("k", components=["scheme", Component.HOST, "path"])
        assert config.components == Component.SCHEME | Component.HOST | Component.PATH

    def test_accepts_raw_bits(self) -> None:
        config = HashConfiguration("k", components=1 | 2 | 8 | 16)
        assert config.has_component(Component.SCHEME)
        assert not config.has_component(Component.FRAGMENT)

    def test_assignment_is_validated(self) -> None:
        config = HashConfiguration.create("k")
        config.components = "fragment"
        assert config.components == Component.FRAGMENT
        with pytest.raises(ConfigurationError):
            config.components = "nonsense"

    @pytest.mark.parametrize("value", [True, 128, -1, "nope", 1.5])
    def test_invalid_values(self, value: object) -> None:
        with pytest.raises(ConfigurationError):
            coerce_components(value)

    def test_all_and_of(self) -> None:
        assert Component.all().value == 127
        assert Component.of("host", 8) == Component.HOST | Component.PATH

    def test_with_components_returns_a_copy(self) -> None:
        config = HashConfiguration.create("k")
        full = config.with_components(Component.all())

        assert full.components == Component.all()
        assert config.components == DEFAULT_COMPONENTS
        assert full.key == config.key

    def test_unknown_option_is_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            HashConfiguration("k", salt="pepper")
