"""
Proof Tree Implementation
Assembly of Merkle multi-proof fragments into a binary tree, and the
depth-first traversal that walks it in verification order.

This module provides:
- ProofLeaf / ProofBranch / ProofUnary: immutable proof tree nodes
- merge_nodes: pair two optional fragments into a parent
- build_next_layer: advance a layer of optional fragments by one level
- LeafItem / ChildrenItem / NEXT: items emitted by the traversal
- DfsIterator: explicit-stack depth-first iterator over a proof tree
- format_proof_node: hex debug rendering

Assembly Rules (Hard Contracts):
1. An absent left fragment never produces a parent; the right one moves up
2. Two present fragments become ProofBranch(left, right), order preserved
3. A present left fragment with an absent right one moves up unpaired
4. An odd layer tail is carried to the next layer unchanged

The resulting shape must match byte-for-byte on the verifying side, so
these rules must not be "improved" (no padding, no reordering).

Traversal Rules:
- A leaf emits LeafItem
- A branch whose children are both leaves emits one ChildrenItem
- Any other branch pushes right then left and emits NEXT, so the left
  subtree is always visited first
- A unary node emits LeafItem for a leaf child, otherwise descends silently
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, Iterator, Optional, Sequence, Union

from prooftree.crypto.hashing import H, to_hex_string
from prooftree.schemas.errors import MalformedProofNodeException


logger = logging.getLogger(__name__)


# =============================================================================
# Tree Nodes
# =============================================================================

@dataclass(frozen=True)
class ProofLeaf(Generic[H]):
    """
    A proof fragment carrying one hash.

    Attributes:
        hash: Opaque hash value supplied by the Hasher
    """
    hash: H

    def as_dfs_iterator(self) -> "DfsIterator[H]":
        return DfsIterator(self)

    def __str__(self) -> str:
        return format_proof_node(self)


@dataclass(frozen=True)
class ProofBranch(Generic[H]):
    """
    An internal proof node with exactly two children.

    Attributes:
        left: Left child subtree
        right: Right child subtree
    """
    left: "ProofNode[H]"
    right: "ProofNode[H]"

    @property
    def children(self) -> tuple["ProofNode[H]", "ProofNode[H]"]:
        return (self.left, self.right)

    def as_dfs_iterator(self) -> "DfsIterator[H]":
        return DfsIterator(self)

    def __str__(self) -> str:
        return format_proof_node(self)


@dataclass(frozen=True)
class ProofUnary(Generic[H]):
    """
    An internal proof node with a single child.

    merge_nodes never produces this shape. It exists so that one-child
    nodes arriving over the wire keep their arity through decode, encode
    and traversal.
    """
    child: "ProofNode[H]"

    @property
    def children(self) -> tuple["ProofNode[H]"]:
        return (self.child,)

    def as_dfs_iterator(self) -> "DfsIterator[H]":
        return DfsIterator(self)

    def __str__(self) -> str:
        return format_proof_node(self)


ProofNode = Union[ProofLeaf[H], ProofBranch[H], ProofUnary[H]]

# One slot per position of a level of the full tree; None means the
# position contributes nothing to the proof.
Layer = list[Optional[ProofNode[H]]]


# =============================================================================
# Layer Building
# =============================================================================

def merge_nodes(
    left: Optional[ProofNode[H]],
    right: Optional[ProofNode[H]],
) -> Optional[ProofNode[H]]:
    """
    Merge two optional sibling fragments into their parent slot.

    Args:
        left: Fragment at the even position, or None
        right: Fragment at the odd position, or None

    Returns:
        - right (possibly None) if left is None
        - ProofBranch(left, right) if both are present
        - left if right is None

    Example:
        >>> merge_nodes(None, ProofLeaf(b"b")) == ProofLeaf(b"b")
        True
    """
    if left is None:
        return right
    if right is None:
        return left
    return ProofBranch(left, right)


def build_next_layer(current_layer: Sequence[Optional[ProofNode[H]]]) -> Layer:
    """
    Build the layer above ``current_layer``.

    Pairs (0, 1), (2, 3), ... are merged with merge_nodes. If the layer
    has odd length, the last slot is copied unchanged so it can pair one
    level up. The input is not modified.

    Callers repeat this until a single slot remains; that slot is the
    assembled proof tree (see proof_layers.build_proof_tree).

    Args:
        current_layer: Optional fragments of the current level

    Returns:
        The next (upper) layer, ceil(len / 2) slots long
    """
    layer_len = len(current_layer)
    upper_layer: Layer = []

    for right_index in range(1, layer_len, 2):
        upper_layer.append(
            merge_nodes(current_layer[right_index - 1], current_layer[right_index])
        )

    if layer_len % 2 != 0:
        upper_layer.append(current_layer[layer_len - 1])

    return upper_layer


# =============================================================================
# Traversal Items
# =============================================================================

@dataclass(frozen=True)
class LeafItem(Generic[H]):
    """A single leaf hash reached during traversal."""
    hash: H


@dataclass(frozen=True)
class ChildrenItem(Generic[H]):
    """Both children of the current branch are leaves."""
    left: H
    right: H

    @property
    def hashes(self) -> tuple[H, H]:
        return (self.left, self.right)


@dataclass(frozen=True)
class NextItem:
    """
    Descended into a branch without emitting leaf content.

    Not a proof value; the consumer should keep pulling items.
    """

    def __repr__(self) -> str:
        return "NEXT"


NEXT = NextItem()

ProofItem = Union[LeafItem[H], ChildrenItem[H], NextItem]


def leaf_item(node: ProofNode[H]) -> Optional[LeafItem[H]]:
    """Return a LeafItem for a leaf node, None for any other node."""
    if isinstance(node, ProofLeaf):
        return LeafItem(node.hash)
    return None


# =============================================================================
# Depth-First Traversal
# =============================================================================

class DfsIterator(Generic[H]):
    """
    Depth-first iterator over a proof tree.

    Uses an explicit stack, so depth is bounded by tree height rather than
    the interpreter's recursion limit. Single pass: once exhausted it keeps
    raising StopIteration.

    Example:
        >>> tree = ProofBranch(ProofBranch(ProofLeaf(b"1"), ProofLeaf(b"2")), ProofLeaf(b"3"))
        >>> list(DfsIterator(tree))
        [NEXT, ChildrenItem(left=b'1', right=b'2'), LeafItem(hash=b'3')]
    """

    def __init__(self, root: ProofNode[H], strict: bool = False) -> None:
        """
        Args:
            root: Node to start the traversal from
            strict: Raise MalformedProofNodeException on an unsupported
                node instead of logging a warning and skipping it
        """
        self._stack: list[ProofNode[H]] = [root]
        self._strict = strict

    def __iter__(self) -> "DfsIterator[H]":
        return self

    def __next__(self) -> ProofItem[H]:
        while self._stack:
            node = self._stack.pop()

            if isinstance(node, ProofLeaf):
                return LeafItem(node.hash)

            if isinstance(node, ProofBranch):
                left, right = node.left, node.right
                if isinstance(left, ProofLeaf) and isinstance(right, ProofLeaf):
                    return ChildrenItem(left.hash, right.hash)
                # LIFO: right goes in first so left comes out first
                self._stack.append(right)
                self._stack.append(left)
                return NEXT

            if isinstance(node, ProofUnary):
                if isinstance(node.child, ProofLeaf):
                    return LeafItem(node.child.hash)
                self._stack.append(node.child)
                continue

            node_type = type(node).__name__
            if self._strict:
                raise MalformedProofNodeException(
                    f"Unsupported proof node variant: {node_type}",
                    node_type=node_type,
                )
            logger.warning(f"Skipping unsupported proof node variant {node_type} during traversal")

        raise StopIteration

    @property
    def exhausted(self) -> bool:
        """True once no work remains on the stack."""
        return not self._stack


def iter_dfs(root: ProofNode[H], strict: bool = False) -> Iterator[ProofItem[H]]:
    """Return a depth-first iterator over ``root``."""
    return DfsIterator(root, strict=strict)


# =============================================================================
# Debug Rendering
# =============================================================================

def format_proof_node(node: ProofNode[H]) -> str:
    """
    Render a proof tree for diagnostics.

    Leaves render as bare lowercase hex of their hash bytes; internal
    nodes render as a bracketed list of their children. Not a wire format.

    Example:
        >>> format_proof_node(ProofBranch(ProofLeaf(b"\\xaa"), ProofLeaf(b"\\xbb")))
        '[aa, bb]'
    """
    parts: list[str] = []
    # entries are (literal text, None) or (None, node still to render)
    stack: list[tuple[Optional[str], object]] = [(None, node)]
    while stack:
        text, current = stack.pop()
        if text is not None:
            parts.append(text)
        elif isinstance(current, ProofLeaf):
            parts.append(to_hex_string(current.hash))
        elif isinstance(current, (ProofBranch, ProofUnary)):
            stack.append(("]", None))
            for i, child in enumerate(reversed(current.children)):
                if i:
                    stack.append((", ", None))
                stack.append((None, child))
            stack.append(("[", None))
        else:
            parts.append(repr(current))
    return "".join(parts)


__all__ = [
    "ProofLeaf",
    "ProofBranch",
    "ProofUnary",
    "ProofNode",
    "Layer",
    "merge_nodes",
    "build_next_layer",
    "LeafItem",
    "ChildrenItem",
    "NextItem",
    "NEXT",
    "ProofItem",
    "leaf_item",
    "DfsIterator",
    "iter_dfs",
    "format_proof_node",
]
