"""
Proof Layer Driver
Convenience wrappers that drive build_next_layer to convergence and
consume the DFS traversal.

This module provides:
- bottom_layer: sparse bottom layer from full leaves and selected indices
- build_proof_tree: repeat build_next_layer until one slot remains
- proof_layers: every intermediate layer, bottom to top
- walk_proof_tree: traversal honoring the runtime config
- collect_leaf_hashes: flatten traversal items into ordered leaf hashes
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from prooftree.config.runtime import RuntimeConfig, get_default_config
from prooftree.crypto.hashing import H
from prooftree.merkle.proof_tree import (
    ChildrenItem,
    DfsIterator,
    Layer,
    LeafItem,
    ProofLeaf,
    ProofNode,
    build_next_layer,
)
from prooftree.schemas.errors import ErrorCodes, ProofTreeException


logger = logging.getLogger(__name__)


def bottom_layer(leaves: Sequence[H], indices: Iterable[int]) -> Layer:
    """
    Build a sparse bottom layer for the given leaf positions.

    Args:
        leaves: Full list of leaf hashes of the original tree
        indices: 0-based positions whose hashes go into the proof

    Returns:
        Layer with ProofLeaf at each selected index and None elsewhere

    Raises:
        ProofTreeException: If an index is out of range
    """
    layer: Layer = [None] * len(leaves)
    for index in indices:
        if index < 0 or index >= len(leaves):
            raise ProofTreeException(
                message=f"Leaf index {index} out of range for {len(leaves)} leaves",
                code=ErrorCodes.INVALID_LAYER_INDEX,
                details={"index": index, "num_leaves": len(leaves)},
            )
        layer[index] = ProofLeaf(leaves[index])
    return layer


def proof_layers(layer: Sequence[Optional[ProofNode[H]]]) -> list[Layer]:
    """
    Return every layer from ``layer`` up to the single-slot top layer.

    The first element is a copy of the input. An empty input yields a
    single empty layer.
    """
    layers: list[Layer] = [list(layer)]
    while len(layers[-1]) > 1:
        layers.append(build_next_layer(layers[-1]))
        logger.debug(f"Built proof layer {len(layers) - 1} with {len(layers[-1])} slots")
    return layers


def build_proof_tree(layer: Sequence[Optional[ProofNode[H]]]) -> Optional[ProofNode[H]]:
    """
    Assemble a proof tree from its bottom layer.

    Args:
        layer: Bottom layer of optional proof fragments

    Returns:
        The root of the assembled proof tree, or None if the layer is
        empty or holds no fragments
    """
    top = proof_layers(layer)[-1]
    if not top:
        return None
    return top[0]


def walk_proof_tree(
    node: ProofNode[H],
    config: RuntimeConfig | None = None,
) -> DfsIterator[H]:
    """Return a DFS iterator using the configured strictness."""
    config = config or get_default_config()
    return DfsIterator(node, strict=config.traversal.strict_mode)


def collect_leaf_hashes(node: ProofNode[H], strict: bool = False) -> list[H]:
    """
    Collect leaf hashes in the order the traversal emits them.

    ChildrenItem contributes its left then right hash; NEXT contributes
    nothing.
    """
    hashes: list[H] = []
    for item in DfsIterator(node, strict=strict):
        if isinstance(item, LeafItem):
            hashes.append(item.hash)
        elif isinstance(item, ChildrenItem):
            hashes.extend(item.hashes)
    return hashes


__all__ = [
    "bottom_layer",
    "proof_layers",
    "build_proof_tree",
    "walk_proof_tree",
    "collect_leaf_hashes",
]
