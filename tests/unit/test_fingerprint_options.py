"""
Unit tests for FingerprintOptions resolution.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from urlseal import FingerprintOptions, FingerprintReader
from urlseal.core.errors import ConfigurationError

IGNORE_FLAGS = [
    "ignore_scheme",
    "ignore_userinfo",
    "ignore_host",
    "ignore_port",
    "ignore_path",
    "ignore_query",
    "ignore_fragment",
]


class TestFingerprintOptions:
    def test_defaults(self) -> None:
        options = FingerprintOptions(secret="42")

        assert options.hash_algo == "sha256"
        for flag in IGNORE_FLAGS:
            assert getattr(options, flag) is False

    def test_secret_is_required(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            FingerprintReader()
        assert "secret" in str(exc_info.value)

    @pytest.mark.parametrize("secret", ["", 42, None, b"bytes"])
    def test_secret_must_be_non_empty_string(self, secret: object) -> None:
        with pytest.raises(ConfigurationError):
            FingerprintReader(secret=secret)

    def test_secret_is_hidden_from_repr(self) -> None:
        assert "hunter2" not in repr(FingerprintOptions(secret="hunter2"))

    @pytest.mark.parametrize("flag", IGNORE_FLAGS)
    @pytest.mark.parametrize("value", [1, "true", None])
    def test_ignore_flags_are_strict_booleans(self, flag: str, value: object) -> None:
        with pytest.raises(ConfigurationError):
            FingerprintReader(secret="42", **{flag: value})

    def test_unknown_option_is_rejected(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            FingerprintReader(secret="42", ignore_everything=True)
        assert exc_info.value.context.model == "FingerprintOptions"

    def test_validation_error_is_chained(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            FingerprintReader(secret="")
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_mapping_and_keyword_overrides(self) -> None:
        reader = FingerprintReader(
            {"secret": "42", "ignore_query": True}, ignore_query=False
        )
        assert reader.options.ignore_query is False

    def test_instance_with_overrides_is_revalidated(self) -> None:
        base = FingerprintOptions(secret="42")
        reader = FingerprintReader(base, hash_algo="MD5")

        assert reader.options is not base
        assert reader.options.hash_algo == "md5"

    def test_rejects_non_mapping_options(self) -> None:
        with pytest.raises(ConfigurationError):
            FingerprintReader(["secret", "42"])  # type: ignore[arg-type]

    def test_options_are_immutable(self) -> None:
        options = FingerprintOptions(secret="42")
        with pytest.raises(ValidationError):
            options.ignore_host = True  # type: ignore[misc]

    def test_default_algorithm_from_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from urlseal.core.settings import reset_settings_cache

        monkeypatch.setenv("URLSEAL_FINGERPRINT__HASH_ALGO", "sha1")
        reset_settings_cache()

        assert FingerprintOptions(secret="42").hash_algo == "sha1"

    @pytest.mark.parametrize("algorithm", ["md5", "sha1", "sha256", "sha512"])
    def test_registered_algorithms(self, algorithm: str) -> None:
        assert FingerprintOptions(secret="42", hash_algo=algorithm).hash_algo == algorithm

    @pytest.mark.parametrize("algorithm", ["bogus", "shake_128"])
    def test_unknown_default_algorithm_from_environment(
        self, monkeypatch: pytest.MonkeyPatch, algorithm: str
    ) -> None:
        from urlseal.core.settings import reset_settings_cache

        monkeypatch.setenv("URLSEAL_FINGERPRINT__HASH_ALGO", algorithm)
        reset_settings_cache()

        with pytest.raises(ConfigurationError):
            FingerprintReader(secret="42")

    def test_default_algorithm_from_environment_is_normalized(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from urlseal.core.settings import reset_settings_cache

        monkeypatch.setenv("URLSEAL_FINGERPRINT__HASH_ALGO", "MD5")
        reset_settings_cache()

        assert FingerprintReader(secret="42").options.hash_algo == "md5"
