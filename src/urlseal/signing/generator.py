"""
Signature computation shared by :class:`Builder` and :class:`Validator`.

Both expose their configuration through the :class:`SignatureComputable`
protocol; the computation itself is a plain function so that neither side
needs a common base class.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..core.algorithms import compute_hmac
from ..url.components import UrlComponents
from .config import HashConfiguration
from .selector import hash_input


@runtime_checkable
class SignatureComputable(Protocol):
    @property
    def config(self) -> HashConfiguration:  # pragma: no cover - structural protocol
        ...


def compute_signature(signer: SignatureComputable, components: UrlComponents) -> str:
    """Return the lowercase hex HMAC over the selected components."""
    config = signer.config
    return compute_hmac(config.algorithm, hash_input(components, config), config.key)
