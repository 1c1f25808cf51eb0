"""
hashtree - integrity checks and discrepancy location for ordered data.

Builds a balanced Merkle tree over the digests of an ordered collection
and answers: where is an item, is this item/branch/tree consistent with
mine, which positions differ, and what proves that an item is included.
"""

__version__ = "1.0.0"

from .merkle import (
    NOT_FOUND,
    HashLinkedList,
    MerkleNode,
    MerkleProof,
    MerkleProofHash,
    MerkleTree,
    MerkleVerifier,
    verify_merkle_proof,
)
from .crypto import combine_hashes, data_to_hash, get_digest, md5_hex
from .schemas import HashTreeException, InvalidArgumentException

__all__ = [
    "NOT_FOUND",
    "HashLinkedList",
    "MerkleNode",
    "MerkleProof",
    "MerkleProofHash",
    "MerkleTree",
    "MerkleVerifier",
    "verify_merkle_proof",
    "combine_hashes",
    "data_to_hash",
    "get_digest",
    "md5_hex",
    "HashTreeException",
    "InvalidArgumentException",
]
