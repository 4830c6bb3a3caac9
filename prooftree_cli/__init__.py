"""
Proof Tree CLI

Command-line interface for assembling, encoding and walking Merkle proof
trees.

Usage:
    python -m prooftree_cli build <hash|-> [<hash|-> ...] [--encode] [--json]
    python -m prooftree_cli walk <hex> [--json]
    python -m prooftree_cli config --show
"""

__version__ = "0.1.0"
