"""
Merkle multi-proof tree assembly and traversal.

Subpackages:
- prooftree.merkle: proof tree nodes, layer builder, DFS traversal, codec
- prooftree.crypto: hashing helpers and the Hasher capability
- prooftree.config: runtime configuration
- prooftree.schemas: error models and exceptions
"""

__version__ = "0.1.0"
