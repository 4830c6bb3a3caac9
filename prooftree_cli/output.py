"""
CLI output helpers shared by the commands.
"""

from __future__ import annotations

import json
import sys
from typing import Any

from prooftree.crypto.hashing import to_hex_string
from prooftree.merkle.proof_tree import ChildrenItem, LeafItem, ProofItem
from prooftree.schemas.errors import ProofTreeException


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_INVALID_INPUT = 2


def item_to_dict(item: ProofItem) -> dict[str, Any]:
    """Describe a traversal item as a JSON-friendly dict."""
    if isinstance(item, LeafItem):
        return {"kind": "leaf", "hash": to_hex_string(item.hash)}
    if isinstance(item, ChildrenItem):
        return {
            "kind": "children",
            "left": to_hex_string(item.left),
            "right": to_hex_string(item.right),
        }
    return {"kind": "next"}


def item_line(item: dict[str, Any]) -> str:
    """One-line form of an item produced by item_to_dict."""
    if item["kind"] == "leaf":
        return f"LEAF {item['hash']}"
    if item["kind"] == "children":
        return f"CHILDREN {item['left']} {item['right']}"
    return "NEXT"


def print_json(data: dict[str, Any]) -> None:
    print(json.dumps(data, indent=2))


def report_error(exc: ProofTreeException, output_json: bool) -> None:
    """Print a proof tree error, as a ProofTreeError document under --json."""
    if output_json:
        print(exc.to_error_model().model_dump_json(indent=2))
    else:
        print(f"Error [{exc.code}]: {exc.message}", file=sys.stderr)
