"""
Test fixtures package for proof tree tests.

This package provides factory functions for creating test objects:
- proof_fixtures.py: leaf hashes, sparse layers and sample trees

Usage:
    from fixtures import make_hashes, make_layer

    def test_something():
        hashes = make_hashes(3)
        layer = make_layer(hashes, present=[0, 2])
"""

from .proof_fixtures import (
    make_hashes,
    make_layer,
    make_scenario_tree,
    short_hash,
)

__all__ = [
    "make_hashes",
    "make_layer",
    "make_scenario_tree",
    "short_hash",
]
