"""
CLI command modules.
"""

from prooftree_cli.commands import build, walk

__all__ = ["build", "walk"]
