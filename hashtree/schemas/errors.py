"""
Module 01 - Schemas & Canonicalization
File: errors.py

Purpose: Standard error taxonomy for the hash tree package.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the package."""

    # Argument Errors
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    EMPTY_LEAF_SOURCE = "EMPTY_LEAF_SOURCE"
    INVALID_NODE = "INVALID_NODE"

    # Tree Errors
    BRANCH_NOT_FOUND = "BRANCH_NOT_FOUND"
    TREE_SHAPE_MISMATCH = "TREE_SHAPE_MISMATCH"

    # Leaf Source Errors
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"

    # Serialization & Configuration Errors
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Base error model for structured error communication.

    Used for passing errors to callers that prefer values over exceptions,
    e.g. when collecting the outcome of many validations.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_ARGUMENT],
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

    def to_exception(self) -> "HashTreeException":
        """Convert this error model to a raised exception."""
        return HashTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class HashTreeException(Exception):
    """
    Base exception for all hash tree errors.

    This exception carries structured error information and can be
    converted to/from MerkleError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "HASHTREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> MerkleError:
        """Convert this exception to a MerkleError model."""
        return MerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidArgumentException(HashTreeException, ValueError):
    """Exception raised when an operation receives an unusable argument."""

    def __init__(
        self,
        message: str,
        argument: str | None = None,
        code: str = ErrorCodes.INVALID_ARGUMENT,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if argument:
            full_details["argument"] = argument
        super().__init__(
            message=message,
            code=code,
            details=full_details,
            retryable=False,
        )


class EmptyLeafSourceException(InvalidArgumentException):
    """Exception raised when a tree is built from an absent or empty source."""

    def __init__(
        self,
        message: str = "Cannot build a Merkle tree from an empty leaf source",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            argument="source",
            code=ErrorCodes.EMPTY_LEAF_SOURCE,
            details=details,
        )


class InvalidNodeException(InvalidArgumentException):
    """Exception raised when a node is constructed with a single child."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_NODE,
            details=details,
        )


class BranchNotFoundException(InvalidArgumentException):
    """Exception raised when a branch is not a node of the tree."""

    def __init__(
        self,
        message: str,
        branch_hash: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if branch_hash is not None:
            full_details["branch_hash"] = branch_hash
        super().__init__(
            message=message,
            argument="branch",
            code=ErrorCodes.BRANCH_NOT_FOUND,
            details=full_details,
        )


class TreeShapeMismatchException(InvalidArgumentException):
    """Exception raised when two trees of different height are compared."""

    def __init__(
        self,
        message: str,
        expected_height: int | None = None,
        actual_height: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if expected_height is not None:
            full_details["expected_height"] = expected_height
        if actual_height is not None:
            full_details["actual_height"] = actual_height
        super().__init__(
            message=message,
            argument="other",
            code=ErrorCodes.TREE_SHAPE_MISMATCH,
            details=full_details,
        )


class ConcurrentModificationException(HashTreeException, RuntimeError):
    """Exception raised when a leaf source changes during iteration."""

    def __init__(
        self,
        message: str = "List modified during iteration",
        expected_mod_count: int | None = None,
        actual_mod_count: int | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if expected_mod_count is not None:
            details["expected_mod_count"] = expected_mod_count
        if actual_mod_count is not None:
            details["actual_mod_count"] = actual_mod_count
        super().__init__(
            message=message,
            code=ErrorCodes.CONCURRENT_MODIFICATION,
            details=details,
            retryable=False,
        )


class CanonicalizationException(HashTreeException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class ConfigurationException(HashTreeException):
    """Exception raised when configuration values are unusable."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if key:
            full_details["key"] = key
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIGURATION_ERROR,
            details=full_details,
            retryable=False,
        )
