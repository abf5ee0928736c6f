"""
Root pytest configuration.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line(
        "markers",
        "critical: Tests that must never fail - core functionality",
    )
    config.addinivalue_line(
        "markers",
        "security: Security-critical tests (tampering, expiry, secrets)",
    )
    config.addinivalue_line(
        "markers",
        "standard: Default risk category for typical unit tests",
    )
    config.addinivalue_line(
        "markers",
        "property: Property-based tests (may be slow)",
    )


@pytest.fixture(autouse=True)
def reset_diagnostics_cache() -> Generator[None, None, None]:
    """Reset cached diagnostics flags and settings around each test.

    Both the diagnostics module and ``get_settings()`` read the environment
    once and cache the result; tests that monkeypatch ``URLSEAL_*`` variables
    need a fresh read.
    """
    import urlseal.core.diagnostics as diag
    from urlseal.core.settings import reset_settings_cache

    diag._reset_for_tests()
    reset_settings_cache()
    yield
    diag._reset_for_tests()
    reset_settings_cache()


@pytest.fixture
def captured_diagnostics(
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[list[dict[str, Any]], None, None]:
    """Enable internal diagnostics and collect emitted payloads.

    Example:
        def test_mismatch_is_reported(captured_diagnostics):
            ...
            assert captured_diagnostics[0]["message"] == "signature mismatch"
    """
    import urlseal.core.diagnostics as diag

    captured: list[dict[str, Any]] = []
    monkeypatch.setenv("URLSEAL_CORE__INTERNAL_LOGGING_ENABLED", "true")
    diag._reset_for_tests()
    original = diag._writer
    diag.set_writer_for_tests(captured.append)
    yield captured
    diag.set_writer_for_tests(original)
