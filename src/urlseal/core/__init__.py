"""Ambient stack shared by signing and fingerprinting."""
