"""
Proof Tree Codec
Binary encoding of proof trees for transport between prover and verifier.

Wire format (SCALE-compatible enum encoding):
- Leaf:  0x00 || hash bytes (exactly hash_size bytes, no length prefix)
- Node:  0x01 || compact(child_count) || child_0 || child_1 ...

ProofBranch is written with child_count 2, ProofUnary with child_count 1.
Any other child count is rejected on decode, as is a compact integer
not written in its shortest form.

Compact integers (little-endian, low two bits select the mode):
- 0b00: single byte, value < 2**6
- 0b01: two bytes, value < 2**14
- 0b10: four bytes, value < 2**30
- 0b11: big-integer mode, upper six bits = byte length - 4
"""
from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

from prooftree.config.runtime import RuntimeConfig, get_default_config
from prooftree.crypto.hashing import Hasher
from prooftree.merkle.proof_tree import ProofBranch, ProofLeaf, ProofNode, ProofUnary
from prooftree.schemas.errors import (
    ConfigurationException,
    ErrorCodes,
    ProofDecodeException,
    ProofEncodeException,
)


LEAF_TAG = 0x00
NODE_TAG = 0x01

# child counts are Compact<u32> on the wire
MAX_CHILD_COUNT = (1 << 32) - 1

T_contra = TypeVar("T_contra", contravariant=True)
T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class Encoder(Protocol[T_contra]):
    """Produces a byte sequence from a value."""

    def encode(self, value: T_contra) -> bytes:
        ...


@runtime_checkable
class Decoder(Protocol[T_co]):
    """Recovers a value from its byte sequence."""

    def decode(self, data: bytes) -> T_co:
        ...


# =============================================================================
# Compact integers
# =============================================================================

def encode_compact(value: int) -> bytes:
    """
    Encode a non-negative integer in SCALE compact form.

    Example:
        >>> encode_compact(2).hex()
        '08'
    """
    if value < 0:
        raise ProofEncodeException(
            f"Compact integers must be non-negative, got {value}",
            details={"value": value},
        )
    if value < 1 << 6:
        return bytes([value << 2])
    if value < 1 << 14:
        return ((value << 2) | 0b01).to_bytes(2, "little")
    if value < 1 << 30:
        return ((value << 2) | 0b10).to_bytes(4, "little")

    length = (value.bit_length() + 7) // 8
    if length > 67:
        raise ProofEncodeException(
            "Compact integer too large", details={"bytes": length}
        )
    return bytes([((length - 4) << 2) | 0b11]) + value.to_bytes(length, "little")


def decode_compact(data: bytes, offset: int = 0, max_value: int | None = None) -> tuple[int, int]:
    """
    Decode a SCALE compact integer.

    Only the shortest encoding of a value is accepted, so decoding and
    re-encoding always reproduces the input bytes.

    Args:
        data: Encoded bytes
        offset: Position of the first byte of the integer
        max_value: Largest value the caller accepts, if bounded

    Returns:
        (value, offset just past the integer)

    Raises:
        ProofDecodeException: If the input ends before the integer does,
            the encoding is not canonical, or the value exceeds max_value
    """
    if offset >= len(data):
        raise ProofDecodeException("Unexpected end of input reading compact length", offset=offset)

    start = offset
    mode = data[offset] & 0b11
    if mode == 0b00:
        value, end = data[offset] >> 2, offset + 1
        canonical = True
    elif mode == 0b11:
        width = (data[offset] >> 2) + 4
        if max_value is not None and width > (max_value.bit_length() + 7) // 8:
            raise ProofDecodeException(
                "Compact integer out of range",
                offset=start,
                details={"bytes": width, "max_value": max_value},
            )
        offset += 1
        end = offset + width
        if end > len(data):
            raise ProofDecodeException("Truncated compact integer", offset=offset)
        value = int.from_bytes(data[offset:end], "little")
        # big-integer mode must use no more bytes than the value needs
        canonical = value >= 1 << 30 and data[end - 1] != 0
    else:
        width = 2 if mode == 0b01 else 4
        end = offset + width
        if end > len(data):
            raise ProofDecodeException("Truncated compact integer", offset=offset)
        value = int.from_bytes(data[offset:end], "little") >> 2
        canonical = value >= (1 << 6 if mode == 0b01 else 1 << 14)

    if not canonical:
        raise ProofDecodeException(
            f"Compact integer {value} is not in its shortest form",
            offset=start,
            details={"value": value},
        )
    if max_value is not None and value > max_value:
        raise ProofDecodeException(
            "Compact integer out of range",
            offset=start,
            details={"value": value, "max_value": max_value},
        )
    return value, end


# =============================================================================
# Proof node codec
# =============================================================================

class ProofNodeCodec:
    """
    Encoder and Decoder for proof trees with fixed-width byte hashes.

    Decoded leaves carry ``bytes`` hashes. Encoding accepts any bytes-like
    hash of exactly ``hash_size`` bytes.

    Example:
        >>> codec = ProofNodeCodec(hash_size=1)
        >>> codec.encode(ProofBranch(ProofLeaf(b"\\x0a"), ProofLeaf(b"\\x0b"))).hex()
        '0108000a000b'
    """

    def __init__(self, hash_size: int = 32, max_depth: int = 256) -> None:
        if hash_size <= 0:
            raise ConfigurationException(
                f"hash_size must be positive, got {hash_size}",
                field_path="codec.hash_size",
            )
        if max_depth <= 0:
            raise ConfigurationException(
                f"max_depth must be positive, got {max_depth}",
                field_path="codec.max_depth",
            )
        self.hash_size = hash_size
        self.max_depth = max_depth

    @classmethod
    def for_hasher(cls, hasher: Hasher, max_depth: int = 256) -> "ProofNodeCodec":
        """Codec sized for the digests ``hasher`` produces."""
        return cls(hash_size=hasher.hash_size, max_depth=max_depth)

    @classmethod
    def from_config(cls, config: RuntimeConfig | None = None) -> "ProofNodeCodec":
        config = config or get_default_config()
        return cls(hash_size=config.codec.hash_size, max_depth=config.codec.max_depth)

    def __repr__(self) -> str:
        return f"ProofNodeCodec(hash_size={self.hash_size}, max_depth={self.max_depth})"

    # -------------------------------------------------------------------------
    # Encoding
    # -------------------------------------------------------------------------

    def encode(self, value: ProofNode) -> bytes:
        out = bytearray()
        # pre-order with an explicit stack; children pushed in reverse
        stack: list[ProofNode] = [value]
        while stack:
            node = stack.pop()

            if isinstance(node, ProofLeaf):
                out.append(LEAF_TAG)
                out += self._hash_bytes(node.hash)
                continue

            if isinstance(node, (ProofBranch, ProofUnary)):
                children = node.children
                out.append(NODE_TAG)
                out += encode_compact(len(children))
                stack.extend(reversed(children))
                continue

            raise ProofEncodeException(
                f"Cannot encode proof node of type {type(node).__name__}",
                details={"type": type(node).__name__},
            )
        return bytes(out)

    def _hash_bytes(self, value: object) -> bytes:
        if isinstance(value, (int, str)):
            raise ProofEncodeException(
                f"Leaf hash of type {type(value).__name__} is not bytes-like",
                details={"type": type(value).__name__},
            )
        try:
            raw = bytes(value)  # type: ignore[call-overload]
        except TypeError as e:
            raise ProofEncodeException(
                f"Leaf hash of type {type(value).__name__} is not bytes-like",
                details={"type": type(value).__name__},
            ) from e
        if len(raw) != self.hash_size:
            raise ProofEncodeException(
                f"Leaf hash must be {self.hash_size} bytes, got {len(raw)}",
                details={"expected": self.hash_size, "actual": len(raw)},
            )
        return raw

    # -------------------------------------------------------------------------
    # Decoding
    # -------------------------------------------------------------------------

    def decode(self, data: bytes) -> ProofNode[bytes]:
        """
        Decode a complete proof tree.

        Raises:
            ProofDecodeException: On truncated input, trailing bytes, unknown
                tags, unsupported child counts or excessive nesting
        """
        data = bytes(data)
        offset = 0
        # open internal nodes: (declared child count, children decoded so far)
        pending: list[tuple[int, list[ProofNode[bytes]]]] = []

        while True:
            if len(pending) + 1 > self.max_depth:
                raise ProofDecodeException(
                    f"Proof tree nested deeper than {self.max_depth} levels",
                    offset=offset,
                    details={"max_depth": self.max_depth},
                )
            if offset >= len(data):
                raise ProofDecodeException("Unexpected end of input reading node tag", offset=offset)

            tag = data[offset]
            offset += 1

            if tag == NODE_TAG:
                count_offset = offset
                count, offset = decode_compact(data, offset, max_value=MAX_CHILD_COUNT)
                if count not in (1, 2):
                    raise ProofDecodeException(
                        f"Proof node must have 1 or 2 children, got {count}",
                        offset=count_offset,
                        code=ErrorCodes.MALFORMED_PROOF_NODE,
                        details={"child_count": count},
                    )
                pending.append((count, []))
                continue

            if tag != LEAF_TAG:
                raise ProofDecodeException(
                    f"Unknown proof node tag 0x{tag:02x}",
                    offset=offset - 1,
                    details={"tag": tag},
                )

            end = offset + self.hash_size
            if end > len(data):
                raise ProofDecodeException(
                    f"Truncated leaf hash: need {self.hash_size} bytes, have {len(data) - offset}",
                    offset=offset,
                )
            node: ProofNode[bytes] = ProofLeaf(data[offset:end])
            offset = end

            # close every parent this leaf completes
            while pending:
                count, children = pending[-1]
                children.append(node)
                if len(children) < count:
                    break
                pending.pop()
                node = ProofUnary(children[0]) if count == 1 else ProofBranch(children[0], children[1])

            if not pending:
                break

        if offset != len(data):
            raise ProofDecodeException(
                f"{len(data) - offset} trailing bytes after proof tree",
                offset=offset,
            )
        return node


def encode_proof_node(node: ProofNode, config: RuntimeConfig | None = None) -> bytes:
    """Encode ``node`` using the configured hash size."""
    return ProofNodeCodec.from_config(config).encode(node)


def decode_proof_node(data: bytes, config: RuntimeConfig | None = None) -> ProofNode[bytes]:
    """Decode ``data`` using the configured hash size and depth limit."""
    return ProofNodeCodec.from_config(config).decode(data)


__all__ = [
    "Encoder",
    "Decoder",
    "ProofNodeCodec",
    "encode_compact",
    "decode_compact",
    "encode_proof_node",
    "decode_proof_node",
    "LEAF_TAG",
    "NODE_TAG",
    "MAX_CHILD_COUNT",
]
