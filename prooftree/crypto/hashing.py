"""
Hashing Utilities
Hash capability and hex helpers used around the proof tree.

This module provides:
- SHA-256 hashing for raw bytes
- The Hasher protocol: the capability that supplies the leaf hash type
- Sha256Hasher, the default Hasher
- Hex encoding/decoding (0x-prefixed for I/O, bare for debug rendering)

The proof tree itself never hashes anything; it is generic over whatever
hash values a Hasher produces.
"""
from __future__ import annotations

import hashlib
from typing import Any, Protocol, TypeVar, runtime_checkable

from prooftree.schemas.errors import ErrorCodes, ProofTreeException


H = TypeVar("H")
H_co = TypeVar("H_co", covariant=True)


@runtime_checkable
class Hasher(Protocol[H_co]):
    """
    Capability supplying the hash value type stored in proof leaves.

    Implementations must produce values that are copyable and
    equality-comparable. Codecs additionally need them to be bytes-like
    and exactly ``hash_size`` bytes long.
    """

    hash_size: int

    def hash(self, data: bytes) -> H_co:
        ...


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


class Sha256Hasher:
    """Default Hasher producing 32-byte SHA-256 digests."""

    hash_size: int = 32

    def hash(self, data: bytes) -> bytes:
        return sha256(data)

    def __repr__(self) -> str:
        return "Sha256Hasher()"


def to_hex_string(value: Any) -> str:
    """
    Render a hash value as lowercase hex without a prefix.

    This is the debug rendering of proof leaves. Any bytes-like value
    (bytes, bytearray, memoryview, or an object implementing __bytes__)
    is accepted.

    Example:
        >>> to_hex_string(b"\\xde\\xad")
        'dead'
    """
    return bytes(value).hex()


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hexadecimal string to bytes.

    The 0x prefix is optional so that values copied from debug output
    (which has no prefix) can be fed back in.

    Args:
        hex_string: Hex string, with or without 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ProofTreeException: If the string has odd length or contains
            invalid hex characters
    """
    hex_content = hex_string[2:] if hex_string.startswith(("0x", "0X")) else hex_string

    if len(hex_content) % 2 != 0:
        raise ProofTreeException(
            message=(
                f"Hex string must have even length, got length {len(hex_content)}"
            ),
            code=ErrorCodes.INVALID_HEX,
            details={"value": hex_string[:80]},
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ProofTreeException(
            message=f"Invalid hex characters in string: {e}",
            code=ErrorCodes.INVALID_HEX,
            details={"value": hex_string[:80]},
        ) from e


__all__ = [
    "H",
    "Hasher",
    "Sha256Hasher",
    "sha256",
    "to_hex_string",
    "to_hex",
    "from_hex",
]
