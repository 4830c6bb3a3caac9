"""
Merkle Proof Trees
Assembly and traversal of Merkle multi-proof trees.

This package provides:
- ProofLeaf / ProofBranch / ProofUnary: immutable proof tree nodes
- merge_nodes / build_next_layer: bottom-up, one-layer-per-call assembly
- DfsIterator: depth-first traversal yielding LeafItem, ChildrenItem, NEXT
- ProofNodeCodec: SCALE-compatible binary encoding of proof trees
- build_proof_tree and friends: drivers that loop layers to convergence

Assembly Rules:
1. Absent left sibling: the right one moves up unchanged
2. Both present: ProofBranch(left, right)
3. Absent right sibling: the left one moves up unchanged
4. Odd tail: carried to the next layer unchanged

Usage:
    from prooftree.merkle import bottom_layer, build_proof_tree, DfsIterator
    from prooftree.crypto import sha256

    leaves = [sha256(data) for data in records]

    # Prove leaves 0 and 2
    tree = build_proof_tree(bottom_layer(leaves, [0, 2]))

    for item in DfsIterator(tree):
        ...
"""
from .proof_tree import (
    NEXT,
    ChildrenItem,
    DfsIterator,
    Layer,
    LeafItem,
    NextItem,
    ProofBranch,
    ProofItem,
    ProofLeaf,
    ProofNode,
    ProofUnary,
    build_next_layer,
    format_proof_node,
    iter_dfs,
    leaf_item,
    merge_nodes,
)

from .proof_layers import (
    bottom_layer,
    build_proof_tree,
    collect_leaf_hashes,
    proof_layers,
    walk_proof_tree,
)

from .codec import (
    Decoder,
    Encoder,
    ProofNodeCodec,
    decode_proof_node,
    encode_proof_node,
)


__all__ = [
    # Nodes
    "ProofLeaf",
    "ProofBranch",
    "ProofUnary",
    "ProofNode",
    "Layer",
    # Building
    "merge_nodes",
    "build_next_layer",
    "bottom_layer",
    "proof_layers",
    "build_proof_tree",
    # Traversal
    "LeafItem",
    "ChildrenItem",
    "NextItem",
    "NEXT",
    "ProofItem",
    "leaf_item",
    "DfsIterator",
    "iter_dfs",
    "walk_proof_tree",
    "collect_leaf_hashes",
    "format_proof_node",
    # Encoding
    "Encoder",
    "Decoder",
    "ProofNodeCodec",
    "encode_proof_node",
    "decode_proof_node",
]
