"""
CLI Walk Command

Decode a SCALE-encoded proof tree and print its depth-first traversal.

Usage:
    prooftree walk 0x0108000a000b [--json]
"""

from __future__ import annotations

import logging
from argparse import Namespace
from typing import Any

from prooftree.config.runtime import RuntimeConfig
from prooftree.crypto.hashing import from_hex
from prooftree.merkle.codec import ProofNodeCodec
from prooftree.merkle.proof_layers import walk_proof_tree
from prooftree.merkle.proof_tree import format_proof_node
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


def run_walk(encoded: str, config: RuntimeConfig) -> dict[str, Any]:
    """Decode ``encoded`` (hex) and describe the tree and its items."""
    tree = ProofNodeCodec.from_config(config).decode(from_hex(encoded))
    items = [item_to_dict(item) for item in walk_proof_tree(tree, config)]
    logger.info(f"Walked proof tree: {len(items)} items")
    return {"tree": format_proof_node(tree), "items": items}


def walk_cmd(args: Namespace, config: RuntimeConfig) -> int:
    """Execute the walk command."""
    output_json = args.json

    try:
        result = run_walk(args.encoded, config)
    except ProofTreeException as e:
        report_error(e, output_json)
        return EXIT_INVALID_INPUT
    except Exception as e:
        if args.debug:
            raise
        logger.error(f"Walk failed: {e}")
        return EXIT_RUNTIME_ERROR

    if output_json:
        print_json(result)
    else:
        print(f"tree: {result['tree']}")
        print(f"items ({len(result['items'])}):")
        for item in result["items"]:
            print(f"  {item_line(item)}")

    return EXIT_SUCCESS


__all__ = ["run_walk", "walk_cmd"]
