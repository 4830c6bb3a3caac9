"""
Cryptographic helpers.

Provides the Hasher capability consumed by the proof tree and hex helpers
used for debug rendering and CLI input.
"""
from .hashing import (
    H,
    Hasher,
    Sha256Hasher,
    sha256,
    to_hex_string,
    to_hex,
    from_hex,
)

__all__ = [
    "H",
    "Hasher",
    "Sha256Hasher",
    "sha256",
    "to_hex_string",
    "to_hex",
    "from_hex",
]
