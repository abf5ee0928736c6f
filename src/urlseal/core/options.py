"""
Option resolution for configuration models.

Accepts a ready model instance, a mapping, or keyword arguments and returns
a validated model. Pydantic validation failures surface as
:class:`ConfigurationError` so callers see one error type for every bad
option, raised before any URL is touched.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigurationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def describe_validation_error(exc: PydanticValidationError) -> str:
    """Flatten pydantic errors into ``field: message`` pairs."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


def parse_config(
    model: type[ModelT],
    config: ModelT | Mapping[str, Any] | None = None,
    **kwargs: Any,
) -> ModelT:
    """Resolve ``config`` and ``kwargs`` into a validated ``model``.

    Keyword arguments override mapping entries; a model instance combined
    with keyword arguments is re-validated with the overrides applied.
    """
    if isinstance(config, model) and not kwargs:
        return config
    if isinstance(config, BaseModel):
        data: dict[str, Any] = config.model_dump()
    elif config is None:
        data = {}
    elif isinstance(config, Mapping):
        data = dict(config)
    else:
        raise ConfigurationError(
            f"Options must be a mapping or {model.__name__}, "
            f"got {type(config).__name__}",
            model=model.__name__,
        )
    data.update(kwargs)
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Invalid {model.__name__} options: {describe_validation_error(e)}",
            model=model.__name__,
            cause=e,
        ) from e
