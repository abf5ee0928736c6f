"""
urlseal: canonical URL signing and fingerprinting.

Sign a URL so that a holder of the same key can check it was not altered
and has not expired, or reduce a URL to a stable keyed digest for
deduplication and cache keys.

Example:
    from urlseal import Builder, HashConfiguration

    builder = Builder(HashConfiguration.create("secure-key"))
    signed = builder.sign("https://example.com/download?id=7", "+1 hour")
    builder.create_validator().verify(signed)
"""

from __future__ import annotations

from ._version import __version__
from .core.clock import Clock, FrozenClock, system_clock
from .core.errors import (
    ConfigurationError,
    ErrorCategory,
    ErrorSeverity,
    InvalidTimeoutError,
    InvalidUrlError,
    SignatureError,
    SignatureExpiredError,
    SignatureInvalidError,
    SignatureNotFoundError,
    SignatureValidationError,
    TimeoutInPastError,
    TimeoutNotParsableError,
    TimeoutUnknownFormatError,
    UnknownHashAlgorithmError,
    UrlSealError,
)
from .core.settings import Settings, get_settings
from .fingerprint.fingerprint import Fingerprint
from .fingerprint.options import FingerprintOptions
from .fingerprint.reader import FingerprintReader
from .signing.builder import Builder
from .signing.config import Component, HashConfiguration
from .signing.validator import Validator

__all__ = [
    "Builder",
    "Validator",
    "HashConfiguration",
    "Component",
    "FingerprintReader",
    "FingerprintOptions",
    "Fingerprint",
    "Clock",
    "FrozenClock",
    "system_clock",
    "Settings",
    "get_settings",
    "UrlSealError",
    "ErrorCategory",
    "ErrorSeverity",
    "ConfigurationError",
    "InvalidUrlError",
    "InvalidTimeoutError",
    "TimeoutNotParsableError",
    "TimeoutUnknownFormatError",
    "TimeoutInPastError",
    "UnknownHashAlgorithmError",
    "SignatureValidationError",
    "SignatureError",
    "SignatureNotFoundError",
    "SignatureInvalidError",
    "SignatureExpiredError",
    "__version__",
]
