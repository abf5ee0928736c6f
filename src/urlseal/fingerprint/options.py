"""Options for :class:`FingerprintReader`."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator

from ..core.algorithms import ensure_algorithm
from ..core.settings import get_settings


class FingerprintOptions(BaseModel):
    """Secret, algorithm and per-component ignore switches.

    Every ``ignore_*`` switch defaults to ``False``: the full URL takes part
    in the fingerprint unless told otherwise.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    secret: StrictStr = Field(min_length=1, repr=False)
    hash_algo: StrictStr = Field(
        default_factory=lambda: get_settings().fingerprint.hash_algo,
        validate_default=True,
    )
    ignore_scheme: StrictBool = False
    ignore_userinfo: StrictBool = False
    ignore_host: StrictBool = False
    ignore_port: StrictBool = False
    ignore_path: StrictBool = False
    ignore_query: StrictBool = False
    ignore_fragment: StrictBool = False

    @field_validator("hash_algo")
    @classmethod
    def _known_algorithm(cls, value: str) -> str:
        return ensure_algorithm(value)

    def ignores(self, part: str) -> bool:
        return bool(getattr(self, f"ignore_{part}"))
