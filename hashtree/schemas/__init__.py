"""
Module 01 - Schemas & Canonicalization
File: __init__.py

Purpose: Export the error taxonomy and canonical serialization helpers.
"""

from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    format_datetime_canonical,
)

from .errors import (
    BranchNotFoundException,
    CanonicalizationException,
    ConcurrentModificationException,
    ConfigurationException,
    EmptyLeafSourceException,
    ErrorCodes,
    HashTreeException,
    InvalidArgumentException,
    InvalidNodeException,
    MerkleError,
    TreeShapeMismatchException,
)

__all__ = [
    # Canonical serialization
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "format_datetime_canonical",
    # Errors
    "BranchNotFoundException",
    "CanonicalizationException",
    "ConcurrentModificationException",
    "ConfigurationException",
    "EmptyLeafSourceException",
    "ErrorCodes",
    "HashTreeException",
    "InvalidArgumentException",
    "InvalidNodeException",
    "MerkleError",
    "TreeShapeMismatchException",
]
