"""
Proof Tree Schemas
File: __init__.py

Purpose: Export the error taxonomy shared by the merkle, config and CLI
packages.
"""

from .errors import (
    ConfigurationException,
    ErrorCodes,
    MalformedProofNodeException,
    ProofDecodeException,
    ProofEncodeException,
    ProofTreeError,
    ProofTreeException,
)

__all__ = [
    "ConfigurationException",
    "ErrorCodes",
    "MalformedProofNodeException",
    "ProofDecodeException",
    "ProofEncodeException",
    "ProofTreeError",
    "ProofTreeException",
]
