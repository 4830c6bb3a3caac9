"""
Pytest configuration and shared fixtures for proof tree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Isolates tests from PROOFTREE_* environment variables and the
   process-wide default config
"""

import os
import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_proof = importlib.import_module("fixtures.proof_fixtures")

make_hashes = _proof.make_hashes
make_layer = _proof.make_layer
make_scenario_tree = _proof.make_scenario_tree
short_hash = _proof.short_hash

from prooftree.config.runtime import set_default_config  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Clear PROOFTREE_* variables and the cached default config."""
    for name in list(os.environ):
        if name.startswith("PROOFTREE_"):
            monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def hashes():
    """Five deterministic 32-byte leaf hashes."""
    return make_hashes(5)


@pytest.fixture
def h1(hashes):
    return hashes[0]


@pytest.fixture
def h2(hashes):
    return hashes[1]


@pytest.fixture
def h3(hashes):
    return hashes[2]


@pytest.fixture
def scenario_tree(h1, h2, h3):
    """Branch(Branch(Leaf(h1), Leaf(h2)), Leaf(h3))."""
    return make_scenario_tree(h1, h2, h3)
