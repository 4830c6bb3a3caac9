"""
Proof Tree Codec Unit Tests
Tests for prooftree/merkle/codec.py

Covers the exact byte layout of each node variant, compact integers,
and rejection of malformed input.
"""
import pytest

from fixtures import short_hash
from prooftree.config.runtime import CodecConfig, RuntimeConfig, set_default_config
from prooftree.crypto.hashing import Sha256Hasher
from prooftree.merkle.codec import (
    Decoder,
    Encoder,
    ProofNodeCodec,
    decode_compact,
    decode_proof_node,
    encode_compact,
    encode_proof_node,
)
from prooftree.merkle.proof_layers import bottom_layer, build_proof_tree
from prooftree.merkle.proof_tree import ProofBranch, ProofLeaf, ProofUnary
from prooftree.schemas.errors import (
    ConfigurationException,
    ErrorCodes,
    ProofDecodeException,
    ProofEncodeException,
)


@pytest.fixture
def codec():
    """Codec with one-byte hashes so expected encodings stay readable."""
    return ProofNodeCodec(hash_size=1)


A, B, C = short_hash(0x0A), short_hash(0x0B), short_hash(0x0C)


class TestCompactIntegers:
    """SCALE compact integer encoding."""

    @pytest.mark.parametrize(
        "value, encoded",
        [
            (0, "00"),
            (1, "04"),
            (2, "08"),
            (63, "fc"),
            (64, "0101"),
            (16383, "fdff"),
            (16384, "02000100"),
            (2**30 - 1, "feffffff"),
            (2**30, "0300000040"),
        ],
    )
    def test_known_encodings(self, value, encoded):
        assert encode_compact(value).hex() == encoded
        assert decode_compact(bytes.fromhex(encoded)) == (value, len(encoded) // 2)

    def test_decode_at_offset(self):
        data = bytes.fromhex("ff0101")

        assert decode_compact(data, 1) == (64, 3)

    def test_negative_rejected(self):
        with pytest.raises(ProofEncodeException):
            encode_compact(-1)

    @pytest.mark.parametrize("data", ["", "01", "020000", "03000000"])
    def test_truncated_rejected(self, data):
        with pytest.raises(ProofDecodeException):
            decode_compact(bytes.fromhex(data))

    @pytest.mark.parametrize(
        "data",
        [
            "0900",          # 2 in two-byte mode
            "02010000",      # 64 in four-byte mode
            "03ffffff3f",    # 2**30 - 1 in big-integer mode
            "070000004000",  # 2**30 with a zero high byte
        ],
    )
    def test_non_canonical_rejected(self, data):
        with pytest.raises(ProofDecodeException) as exc_info:
            decode_compact(bytes.fromhex(data))

        assert "shortest form" in exc_info.value.message

    def test_max_value_bounds_width(self):
        with pytest.raises(ProofDecodeException) as exc_info:
            decode_compact(bytes.fromhex("13"), max_value=(1 << 32) - 1)

        assert exc_info.value.details == {"bytes": 8, "max_value": (1 << 32) - 1, "offset": 0}

    def test_max_value_bounds_value(self):
        with pytest.raises(ProofDecodeException):
            decode_compact(bytes.fromhex("fc"), max_value=10)


class TestEncoding:
    """Exact bytes for each node shape."""

    def test_leaf(self, codec):
        assert codec.encode(ProofLeaf(A)).hex() == "000a"

    def test_branch(self, codec):
        assert codec.encode(ProofBranch(ProofLeaf(A), ProofLeaf(B))).hex() == "0108000a000b"

    def test_unary(self, codec):
        assert codec.encode(ProofUnary(ProofLeaf(A))).hex() == "0104000a"

    def test_nested_preserves_child_order(self, codec):
        tree = ProofBranch(ProofBranch(ProofLeaf(A), ProofLeaf(B)), ProofLeaf(C))

        assert codec.encode(tree).hex() == "01080108000a000b000c"

    def test_swapped_children_encode_differently(self, codec):
        ab = codec.encode(ProofBranch(ProofLeaf(A), ProofLeaf(B)))
        ba = codec.encode(ProofBranch(ProofLeaf(B), ProofLeaf(A)))

        assert ab != ba

    def test_bytearray_hash_accepted(self, codec):
        assert codec.encode(ProofLeaf(bytearray(b"\x0a"))).hex() == "000a"

    def test_wrong_hash_size_rejected(self):
        with pytest.raises(ProofEncodeException) as exc_info:
            ProofNodeCodec().encode(ProofLeaf(b"short"))

        assert exc_info.value.code == ErrorCodes.PROOF_ENCODE_ERROR
        assert exc_info.value.details == {"expected": 32, "actual": 5}

    @pytest.mark.parametrize("value", ["0a", 10, 1.5, None])
    def test_non_bytes_hash_rejected(self, codec, value):
        with pytest.raises(ProofEncodeException):
            codec.encode(ProofLeaf(value))

    def test_unknown_node_rejected(self, codec):
        with pytest.raises(ProofEncodeException):
            codec.encode(ProofBranch(ProofLeaf(A), "bogus"))


class TestDecoding:
    """Decoding accepted and rejected inputs."""

    @pytest.mark.parametrize(
        "encoded, expected",
        [
            ("000a", ProofLeaf(A)),
            ("0108000a000b", ProofBranch(ProofLeaf(A), ProofLeaf(B))),
            ("0104000a", ProofUnary(ProofLeaf(A))),
            (
                "01080108000a000b000c",
                ProofBranch(ProofBranch(ProofLeaf(A), ProofLeaf(B)), ProofLeaf(C)),
            ),
        ],
    )
    def test_decodes_shapes(self, codec, encoded, expected):
        assert codec.decode(bytes.fromhex(encoded)) == expected

    def test_decoded_hashes_are_bytes(self, codec):
        node = codec.decode(bytearray.fromhex("000a"))

        assert isinstance(node.hash, bytes)

    @pytest.mark.parametrize("encoded, count", [("0100", 0), ("010c000a000b000c", 3)])
    def test_unsupported_child_count(self, codec, encoded, count):
        with pytest.raises(ProofDecodeException) as exc_info:
            codec.decode(bytes.fromhex(encoded))

        assert exc_info.value.code == ErrorCodes.MALFORMED_PROOF_NODE
        assert exc_info.value.details["child_count"] == count

    def test_trailing_bytes(self, codec):
        with pytest.raises(ProofDecodeException) as exc_info:
            codec.decode(bytes.fromhex("000aff"))

        assert exc_info.value.code == ErrorCodes.PROOF_DECODE_ERROR
        assert exc_info.value.details["offset"] == 2

    @pytest.mark.parametrize("encoded", ["", "00", "0108000a00", "0108000a", "01"])
    def test_truncated(self, codec, encoded):
        with pytest.raises(ProofDecodeException):
            codec.decode(bytes.fromhex(encoded))

    def test_unknown_tag(self, codec):
        with pytest.raises(ProofDecodeException) as exc_info:
            codec.decode(bytes.fromhex("020a"))

        assert exc_info.value.details["tag"] == 2
        assert exc_info.value.details["offset"] == 0

    def test_depth_limit(self):
        codec = ProofNodeCodec(hash_size=1, max_depth=2)
        ok = bytes.fromhex("0104000a")
        too_deep = bytes.fromhex("01040104000a")

        assert codec.decode(ok) == ProofUnary(ProofLeaf(A))
        with pytest.raises(ProofDecodeException) as exc_info:
            codec.decode(too_deep)
        assert exc_info.value.details["max_depth"] == 2

    def test_non_canonical_child_count(self, codec):
        """A child count of 2 written in two-byte mode is not accepted."""
        with pytest.raises(ProofDecodeException) as exc_info:
            codec.decode(bytes.fromhex("010900000a000b"))

        assert exc_info.value.code == ErrorCodes.PROOF_DECODE_ERROR
        assert exc_info.value.details["offset"] == 1

    def test_child_count_beyond_u32(self, codec):
        with pytest.raises(ProofDecodeException) as exc_info:
            codec.decode(bytes.fromhex("0113") + bytes(8))

        assert exc_info.value.details["max_value"] == (1 << 32) - 1

    def test_deep_nesting(self):
        """Nesting far past the recursion limit decodes and re-encodes."""
        depth = 5000
        data = bytes.fromhex("0104") * depth + bytes.fromhex("000a")
        codec = ProofNodeCodec(hash_size=1, max_depth=depth + 1)

        root = codec.decode(data)

        node, levels = root, 0
        while isinstance(node, ProofUnary):
            node, levels = node.child, levels + 1
        assert levels == depth
        assert node == ProofLeaf(A)
        assert codec.encode(root) == data

    def test_deep_nesting_over_limit(self):
        depth = 5000
        data = bytes.fromhex("0104") * depth + bytes.fromhex("000a")

        with pytest.raises(ProofDecodeException) as exc_info:
            ProofNodeCodec(hash_size=1, max_depth=depth).decode(data)

        assert exc_info.value.details["max_depth"] == depth

    def test_full_width_tree_round_trip(self, hashes):
        """A built 32-byte proof tree survives encode/decode unchanged."""
        tree = build_proof_tree(bottom_layer(hashes, [0, 2, 3, 4]))
        codec = ProofNodeCodec()

        assert codec.decode(codec.encode(tree)) == tree


class TestConstruction:
    """Codec construction and protocol conformance."""

    def test_satisfies_protocols(self, codec):
        assert isinstance(codec, Encoder)
        assert isinstance(codec, Decoder)

    def test_for_hasher(self):
        assert ProofNodeCodec.for_hasher(Sha256Hasher()).hash_size == 32

    @pytest.mark.parametrize("kwargs", [{"hash_size": 0}, {"max_depth": 0}])
    def test_invalid_parameters(self, kwargs):
        with pytest.raises(ConfigurationException) as exc_info:
            ProofNodeCodec(**kwargs)

        field = next(iter(kwargs))
        assert exc_info.value.details["field_path"] == f"codec.{field}"

    def test_from_config(self):
        config = RuntimeConfig(codec=CodecConfig(hash_size=4, max_depth=8))
        codec = ProofNodeCodec.from_config(config)

        assert (codec.hash_size, codec.max_depth) == (4, 8)

    def test_module_helpers_use_config(self):
        config = RuntimeConfig(codec=CodecConfig(hash_size=1))
        tree = ProofBranch(ProofLeaf(A), ProofLeaf(B))

        encoded = encode_proof_node(tree, config)

        assert encoded.hex() == "0108000a000b"
        assert decode_proof_node(encoded, config) == tree

    def test_module_helpers_use_default_config(self):
        set_default_config(RuntimeConfig(codec=CodecConfig(hash_size=1)))

        assert encode_proof_node(ProofLeaf(A)).hex() == "000a"
        assert decode_proof_node(bytes.fromhex("000b")) == ProofLeaf(B)
