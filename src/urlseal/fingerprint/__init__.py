"""Keyed URL fingerprints."""

from .fingerprint import Fingerprint
from .options import FingerprintOptions
from .reader import FingerprintReader

__all__ = ["Fingerprint", "FingerprintOptions", "FingerprintReader"]
