"""
Module 02 - Hashing Utilities
Digest functions and the parent-combine rule for Merkle commitments.

This module provides:
- MD5 hex digests for raw bytes (the default leaf digest)
- Digest lookup by hashlib algorithm name
- Item-to-bytes encoding (bytes, text, canonical JSON for everything else)
- The combine rule used for every parent hash

Combine Rule:
    combine(a, b) = ""                      if a == "" and b == ""
                    digest(bytes(a) + bytes(b)) otherwise

Security/Determinism Notes:
- Digest functions are pure: same bytes, same hex string
- The empty string is never a valid digest output, so sentinel
  hashes cannot collide with real leaves
"""
from __future__ import annotations

import hashlib
from typing import Any, Callable, Optional

from hashtree.config.runtime import get_default_config
from hashtree.schemas.canonical import dumps_canonical
from hashtree.schemas.errors import ConfigurationException


Digest = Callable[[bytes], str]

# Hash carried by padding leaves and all-padding subtrees
SENTINEL_HASH: str = ""


def md5_hex(data: bytes) -> str:
    """
    Compute the MD5 digest of raw bytes as a lowercase hex string.

    Example:
        >>> md5_hex(b"hello")
        '5d41402abc4b2a76b9719d911017c592'
    """
    return hashlib.md5(data).hexdigest()


def get_digest(algorithm: str) -> Digest:
    """
    Return a hex digest function for a hashlib algorithm name.

    Args:
        algorithm: Name accepted by hashlib.new (e.g. "md5", "sha256")

    Returns:
        Callable mapping bytes to a fixed-width hex string

    Raises:
        ConfigurationException: If the algorithm is unknown or has a
            variable-length output (shake_*)
    """
    name = algorithm.lower()
    if name == "md5":
        return md5_hex
    if name not in hashlib.algorithms_available:
        raise ConfigurationException(
            f"Unknown digest algorithm: {algorithm}",
            key="hashing.algorithm",
        )
    if hashlib.new(name).digest_size == 0:
        raise ConfigurationException(
            f"Digest algorithm {algorithm} has no fixed output width",
            key="hashing.algorithm",
        )

    def _digest(data: bytes) -> str:
        return hashlib.new(name, data).hexdigest()

    _digest.__name__ = f"{name}_hex"
    return _digest


def default_digest() -> Digest:
    """Digest function selected by the default runtime configuration."""
    return get_digest(get_default_config().hashing.algorithm)


def data_to_bytes(item: Any, encoding: Optional[str] = None) -> bytes:
    """
    Encode an item to the bytes that get digested.

    bytes pass through, text is encoded with the configured encoding and
    anything else goes through canonical JSON.
    """
    if isinstance(item, (bytes, bytearray)):
        return bytes(item)
    encoding = encoding or get_default_config().hashing.encoding
    if isinstance(item, str):
        return item.encode(encoding)
    return dumps_canonical(item).encode(encoding)


def data_to_hash(item: Any, digest: Optional[Digest] = None) -> str:
    """
    Compute the leaf digest of an item.

    Args:
        item: Data item (bytes, str, or canonically serializable object)
        digest: Digest function, defaults to the configured one

    Returns:
        Hex digest of the item's bytes
    """
    digest = digest or default_digest()
    return digest(data_to_bytes(item))


def combine_hashes(left: str, right: str, digest: Optional[Digest] = None) -> str:
    """
    Compute a parent hash from two child hashes.

    Two sentinel children produce a sentinel parent; otherwise the
    encoded child hashes are concatenated left first and digested.
    """
    if left == SENTINEL_HASH and right == SENTINEL_HASH:
        return SENTINEL_HASH
    digest = digest or default_digest()
    return digest(left.encode("utf-8") + right.encode("utf-8"))


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
