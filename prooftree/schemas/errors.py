"""
Proof Tree Errors
File: errors.py

Purpose: Standard error taxonomy for proof tree assembly, traversal and
encoding. Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the package."""

    # Tree shape errors
    MALFORMED_PROOF_NODE = "MALFORMED_PROOF_NODE"
    INVALID_LAYER_INDEX = "INVALID_LAYER_INDEX"

    # Wire format errors
    PROOF_DECODE_ERROR = "PROOF_DECODE_ERROR"
    PROOF_ENCODE_ERROR = "PROOF_ENCODE_ERROR"
    INVALID_HEX = "INVALID_HEX"

    # Runtime errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class ProofTreeError(BaseModel):
    """
    Base error model for structured error reporting.

    Used where errors are passed around or printed as data rather than
    raised, e.g. the CLI's JSON output.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.PROOF_DECODE_ERROR],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "ProofTreeException":
        """Convert this error model to a raised exception."""
        return ProofTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class ProofTreeException(Exception):
    """
    Base exception for all proof tree errors.

    Carries structured error information and can be converted to/from
    ProofTreeError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "PROOF_TREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> ProofTreeError:
        """Convert this exception to a ProofTreeError model."""
        return ProofTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class MalformedProofNodeException(ProofTreeException):
    """Raised when a node does not have one of the supported shapes."""

    def __init__(
        self,
        message: str,
        node_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if node_type:
            full_details["node_type"] = node_type
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_PROOF_NODE,
            details=full_details,
            retryable=False,
        )


class ProofDecodeException(ProofTreeException):
    """Raised when bytes cannot be decoded into a proof node."""

    def __init__(
        self,
        message: str,
        offset: int | None = None,
        code: str = ErrorCodes.PROOF_DECODE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if offset is not None:
            full_details["offset"] = offset
        super().__init__(
            message=message,
            code=code,
            details=full_details,
            retryable=False,
        )


class ProofEncodeException(ProofTreeException):
    """Raised when a proof node cannot be encoded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.PROOF_ENCODE_ERROR,
            details=details,
            retryable=False,
        )


class ConfigurationException(ProofTreeException):
    """Raised when configuration values are missing or invalid."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIGURATION_ERROR,
            details=full_details,
            retryable=False,
        )
