"""
Standardized error hierarchy for urlseal.

Every failure raised by the library is a subclass of :class:`UrlSealError`
and carries an :class:`ErrorContext` with a category, a severity and any
extra fields supplied at the raise site. Errors are local and synchronous;
nothing is retried.

Callers that only care about "is this URL acceptable" should catch
:class:`SignatureValidationError`; configuration and URL syntax errors are
faults and are never folded into a boolean result.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class ErrorCategory(str, Enum):
    """Broad classification used for diagnostics and serialization."""

    CONFIG = "config"
    URL = "url"
    TIMEOUT = "timeout"
    CRYPTO = "crypto"
    SIGNATURE = "signature"
    SERIALIZATION = "serialization"


class ErrorSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorContext(BaseModel):
    """Context captured when an error is created."""

    model_config = ConfigDict(extra="allow")

    error_id: str = Field(default_factory=lambda: uuid4().hex)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    category: ErrorCategory
    severity: ErrorSeverity


class UrlSealError(Exception):
    """Base class for all urlseal errors."""

    category: ErrorCategory = ErrorCategory.CONFIG
    severity: ErrorSeverity = ErrorSeverity.MEDIUM

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        severity: ErrorSeverity | None = None,
        cause: BaseException | None = None,
        **context: Any,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = ErrorContext(
            category=category or self.category,
            severity=severity or self.severity,
            **context,
        )
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for diagnostics."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "context": self.context.model_dump(mode="json"),
        }


class ConfigurationError(UrlSealError):
    """Invalid option value or option combination, raised at construction."""

    category = ErrorCategory.CONFIG
    severity = ErrorSeverity.HIGH

    @classmethod
    def different_keys_required(cls, key: str) -> ConfigurationError:
        return cls(
            f'The URL key "{key}" was defined for the signature AND the timeout. '
            "The keys must be different.",
            field_name="signature_key",
            field_value=key,
        )

    @classmethod
    def invalid_algorithm(
        cls, algorithm: str, available: list[str]
    ) -> ConfigurationError:
        return cls(
            f'The hash algorithm "{algorithm}" is not available on this platform. '
            f'Use one of the registered hashing algorithms: "{", ".join(available)}".',
            field_name="algorithm",
            field_value=algorithm,
        )


class InvalidUrlError(UrlSealError):
    """The URL is empty, syntactically invalid, or lacks a required part."""

    category = ErrorCategory.URL

    @classmethod
    def is_empty(cls) -> InvalidUrlError:
        return cls("The URL string is empty!")

    @classmethod
    def syntax_error(cls, url: str, cause: BaseException) -> InvalidUrlError:
        return cls(f"The uri `{url}` is invalid: {cause}", url=url, cause=cause)

    @classmethod
    def scheme_is_missing(cls, url: str) -> InvalidUrlError:
        return cls(f"The scheme for url ({url}) is missing!", url=url)


class InvalidTimeoutError(UrlSealError):
    """The timeout passed to a signer cannot be used."""

    category = ErrorCategory.TIMEOUT


class TimeoutNotParsableError(InvalidTimeoutError):
    def __init__(self, timeout: str, *, cause: BaseException | None = None) -> None:
        super().__init__(
            f'The timeout "{timeout}" cannot be parsed and is not a valid '
            "absolute or relative date expression.",
            cause=cause,
            timeout=timeout,
        )


class TimeoutUnknownFormatError(InvalidTimeoutError):
    def __init__(self, given: object) -> None:
        type_name = type(given).__name__
        super().__init__(
            f'Unknown timeout type given: "{type_name}" '
            "(expected: int|str|datetime|date)!",
            timeout_type=type_name,
        )


class TimeoutInPastError(InvalidTimeoutError):
    def __init__(self, timestamp: int, now: int) -> None:
        super().__init__(
            f"The timeout is not valid: Timeout cannot be in the past "
            f"({timestamp} < {now})",
            timeout_timestamp=timestamp,
            now=now,
        )


class UnknownHashAlgorithmError(UrlSealError):
    """The platform does not provide the configured HMAC algorithm."""

    category = ErrorCategory.CRYPTO
    severity = ErrorSeverity.HIGH

    def __init__(self, algorithm: str, *, cause: BaseException | None = None) -> None:
        super().__init__(
            f'Hash unknown: "{algorithm}"!', cause=cause, algorithm=algorithm
        )


class SignatureValidationError(UrlSealError):
    """Base for every reason a signed URL is rejected."""

    category = ErrorCategory.SIGNATURE
    severity = ErrorSeverity.LOW


class SignatureError(SignatureValidationError):
    """The signature itself is absent or wrong."""


class SignatureNotFoundError(SignatureError):
    def __init__(self, query: str | None) -> None:
        if not query:
            message = (
                "Can not verify the URL because it does not contain a query string"
            )
        else:
            message = (
                "Can not verify the URL because it does not contain a signature "
                f'in query string "{query}".'
            )
        super().__init__(message, query=query)


class SignatureInvalidError(SignatureError):
    """Signature is empty or does not match the recomputed value."""

    EMPTY = "empty"
    MISMATCH = "mismatch"

    def __init__(
        self,
        message: str,
        *,
        reason: str,
        expected: str | None = None,
        **context: Any,
    ) -> None:
        super().__init__(message, reason=reason, **context)
        self.reason = reason
        self.expected = expected

    @classmethod
    def empty_signature(cls, given: str) -> SignatureInvalidError:
        return cls(f'The Signature "{given}" is invalid.', reason=cls.EMPTY)

    @classmethod
    def does_not_match(cls, given: str, expected: str) -> SignatureInvalidError:
        return cls(
            f'The Signature "{given}" is invalid for this URL.',
            reason=cls.MISMATCH,
            expected=expected,
            severity=ErrorSeverity.MEDIUM,
        )


class SignatureExpiredError(SignatureValidationError):
    def __init__(self, timeout: str, now: int) -> None:
        super().__init__(
            "Signature has expired and is no longer valid!",
            timeout=timeout,
            now=now,
        )


__all__ = [
    "ErrorCategory",
    "ErrorSeverity",
    "ErrorContext",
    "UrlSealError",
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
]
