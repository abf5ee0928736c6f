"""
HMAC URL signing with optional expiry.
"""

from .builder import Builder
from .config import DEFAULT_COMPONENTS, Component, HashConfiguration
from .generator import SignatureComputable, compute_signature
from .validator import Validator

__all__ = [
    "Builder",
    "Validator",
    "HashConfiguration",
    "Component",
    "DEFAULT_COMPONENTS",
    "SignatureComputable",
    "compute_signature",
]
