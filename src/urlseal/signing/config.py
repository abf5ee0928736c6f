"""
Signing configuration.

A :class:`HashConfiguration` is created once per signer/verifier pair. It is
validated at construction and on every attribute assignment, so an invalid
combination (same query key for signature and timeout, unknown algorithm)
fails before any URL is processed.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Flag
from functools import reduce
from operator import or_
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainValidator,
    field_validator,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError

from ..core.algorithms import ensure_algorithm
from ..core.errors import ConfigurationError
from ..core.options import describe_validation_error
from ..core.settings import get_settings


class Component(Flag):
    """URL components that can take part in a signature."""

    NONE = 0
    SCHEME = 1
    HOST = 2
    PORT = 4
    PATH = 8
    QUERY = 16
    FRAGMENT = 32
    USERINFO = 64

    @classmethod
    def all(cls) -> Component:
        return reduce(or_, (m for m in cls if m is not cls.NONE), cls.NONE)

    @classmethod
    def of(cls, *flags: Component | str | int) -> Component:
        """Union of flags given as members, names or raw bits."""
        result = cls.NONE
        for flag in flags:
            result |= coerce_components(flag)
        return result


DEFAULT_COMPONENTS = Component.HOST | Component.PATH | Component.QUERY


def coerce_components(value: Any) -> Component:
    """Turn a member, a name, a bit mask or an iterable of those into a flag."""
    if isinstance(value, Component):
        return value
    if isinstance(value, bool):
        raise ConfigurationError(
            "components must be a Component flag, name or iterable",
            field_name="components",
        )
    if isinstance(value, int):
        if value < 0 or value & ~Component.all().value:
            raise ConfigurationError(
                f"Unknown component bits in mask {value}", field_name="components"
            )
        return Component(value)
    if isinstance(value, str):
        try:
            return Component[value.strip().upper()]
        except KeyError:
            raise ConfigurationError(
                f'Unknown URL component "{value}"', field_name="components"
            ) from None
    if isinstance(value, Iterable):
        return reduce(or_, (coerce_components(v) for v in value), Component.NONE)
    raise ConfigurationError(
        f"Unsupported components value of type {type(value).__name__}",
        field_name="components",
    )


ComponentMask = Annotated[Component, PlainValidator(coerce_components)]


class HashConfiguration(BaseModel):
    """Key, query keys, component mask and algorithm for URL signatures."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    key: str | bytes = Field(repr=False, description="HMAC secret")
    signature_key: str = Field(
        default_factory=lambda: get_settings().signing.signature_key, min_length=1
    )
    timeout_key: str = Field(
        default_factory=lambda: get_settings().signing.timeout_key, min_length=1
    )
    components: ComponentMask = Field(default=DEFAULT_COMPONENTS)
    algorithm: str = Field(
        default_factory=lambda: get_settings().signing.algorithm, validate_default=True
    )

    def __init__(
        self,
        key: str | bytes,
        signature_key: str | None = None,
        timeout_key: str | None = None,
        **data: Any,
    ) -> None:
        data["key"] = key
        if signature_key is not None:
            data["signature_key"] = signature_key
        if timeout_key is not None:
            data["timeout_key"] = timeout_key
        try:
            super().__init__(**data)
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Invalid HashConfiguration: {describe_validation_error(e)}",
                cause=e,
            ) from e

    @classmethod
    def create(cls, key: str | bytes) -> HashConfiguration:
        """Configuration with default query keys, mask and algorithm."""
        return cls(key)

    @field_validator("algorithm")
    @classmethod
    def _known_algorithm(cls, value: str) -> str:
        return ensure_algorithm(value)

    @model_validator(mode="after")
    def _distinct_keys(self) -> HashConfiguration:
        if self.signature_key == self.timeout_key:
            raise ConfigurationError.different_keys_required(self.signature_key)
        return self

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "signature_key" and value == self.timeout_key:
            raise ConfigurationError.different_keys_required(value)
        if name == "timeout_key" and value == self.signature_key:
            raise ConfigurationError.different_keys_required(value)
        try:
            super().__setattr__(name, value)
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Invalid value for {name}: {describe_validation_error(e)}",
                field_name=name,
                cause=e,
            ) from e

    def has_component(self, component: Component) -> bool:
        return bool(self.components & component)

    def with_components(self, *components: Component | str | int) -> HashConfiguration:
        """Copy of this configuration hashing exactly ``components``."""
        return self.model_copy(update={"components": Component.of(*components)})
