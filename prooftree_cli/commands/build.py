"""
CLI Build Command

Assemble a proof tree from a bottom layer given on the command line:
- Each argument is a hex hash, or "-" for a slot absent from the proof
- With --hash-data, arguments are raw strings hashed with SHA-256
- Prints every layer, the assembled tree and its traversal items
- Optionally prints the SCALE-encoded tree

Usage:
    prooftree build 0xaa.. - 0xcc.. [--encode] [--json]
    prooftree build alice bob - dave --hash-data
"""

from __future__ import annotations

import logging
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from prooftree.config.runtime import RuntimeConfig
from prooftree.crypto.hashing import Sha256Hasher, from_hex, to_hex
from prooftree.merkle.codec import ProofNodeCodec
from prooftree.merkle.proof_layers import proof_layers, walk_proof_tree
from prooftree.merkle.proof_tree import Layer, ProofLeaf, format_proof_node
from prooftree.schemas.errors import ProofTreeException
from prooftree_cli.output import (
    EXIT_INVALID_INPUT,
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    item_line,
    item_to_dict,
    print_json,
    report_error,
)


logger = logging.getLogger(__name__)

ABSENT_SLOT = "-"


@dataclass
class BuildSummary:
    """Result of a build command for CLI output."""
    layers: list[list[Optional[str]]] = field(default_factory=list)
    tree: Optional[str] = None
    items: list[dict[str, Any]] = field(default_factory=list)
    encoded: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.encoded is None:
            del d["encoded"]
        return d


def parse_layer(values: list[str], hash_data: bool = False) -> Layer:
    """Turn CLI arguments into a bottom layer of optional leaves."""
    hasher = Sha256Hasher()
    layer: Layer = []
    for value in values:
        if value == ABSENT_SLOT:
            layer.append(None)
        elif hash_data:
            layer.append(ProofLeaf(hasher.hash(value.encode("utf-8"))))
        else:
            layer.append(ProofLeaf(from_hex(value)))
    return layer


def run_build(
    values: list[str],
    config: RuntimeConfig,
    hash_data: bool = False,
    encode: bool = False,
) -> BuildSummary:
    """Assemble and walk the proof tree described by ``values``."""
    layers = proof_layers(parse_layer(values, hash_data=hash_data))
    logger.info(f"Built {len(layers)} proof layers from {len(values)} slots")

    summary = BuildSummary(
        layers=[
            [None if node is None else format_proof_node(node) for node in layer]
            for layer in layers
        ],
    )

    top = layers[-1]
    tree = top[0] if top else None
    if tree is None:
        logger.warning("Proof layer holds no fragments; nothing to walk")
        return summary

    summary.tree = format_proof_node(tree)
    summary.items = [item_to_dict(item) for item in walk_proof_tree(tree, config)]

    if encode:
        summary.encoded = to_hex(ProofNodeCodec.from_config(config).encode(tree))

    return summary


def print_summary_human(summary: BuildSummary) -> None:
    """Print summary in human-readable format."""
    for depth, layer in enumerate(summary.layers):
        print(f"layer {depth}: [" + ", ".join(slot or ABSENT_SLOT for slot in layer) + "]")
    print(f"tree: {summary.tree or '(empty)'}")
    print(f"items ({len(summary.items)}):")
    for item in summary.items:
        print(f"  {item_line(item)}")
    if summary.encoded is not None:
        print(f"encoded: {summary.encoded}")


def build_cmd(args: Namespace, config: RuntimeConfig) -> int:
    """
    Execute the build command.

    Args:
        args: Parsed command-line arguments
        config: Effective runtime configuration

    Returns:
        Exit code
    """
    output_json = args.json

    try:
        summary = run_build(
            args.leaves,
            config,
            hash_data=args.hash_data,
            encode=args.encode,
        )
    except ProofTreeException as e:
        report_error(e, output_json)
        return EXIT_INVALID_INPUT
    except Exception as e:
        if args.debug:
            raise
        logger.error(f"Build failed: {e}")
        return EXIT_RUNTIME_ERROR

    if output_json:
        print_json(summary.to_dict())
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS


__all__ = [
    "BuildSummary",
    "parse_layer",
    "run_build",
    "build_cmd",
]
