"""
Core cryptographic utilities.

Module 02 provides digest functions and the Merkle combine rule.
"""
from .hashing import (
    Digest,
    SENTINEL_HASH,
    md5_hex,
    get_digest,
    default_digest,
    data_to_bytes,
    data_to_hash,
    combine_hashes,
)

__all__ = [
    "Digest",
    "SENTINEL_HASH",
    "md5_hex",
    "get_digest",
    "default_digest",
    "data_to_bytes",
    "data_to_hash",
    "combine_hashes",
]
