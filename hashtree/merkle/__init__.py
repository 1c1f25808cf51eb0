"""
Module 03 - Merkle Tree and Proofs
Balanced Merkle tree over ordered data with lookup, validation and proofs.

This module provides:
- MerkleNode: Immutable node, equal to any node with the same hash
- MerkleTree: Tree construction, indexing, validation and proof generation
- MerkleProof / MerkleProofHash: Proof trail objects
- verify_merkle_proof / MerkleVerifier: Pure proof verification
- HashLinkedList: Ordered leaf source with fail-fast iteration

Usage:
    from hashtree.merkle import HashLinkedList, MerkleTree

    items = HashLinkedList()
    for record in records:
        items.add_at_tail(record)

    tree = MerkleTree(items)
    proof = tree.proof_for(records[2])
    assert proof.prove_validity_of_data(records[2])

    # Positions that changed between two snapshots of the same size
    changed = tree.find_invalid_data_indices(MerkleTree(other_items))
"""
from .merkle_node import (
    MerkleNode,
    edge_leaf_hash,
    iter_preorder,
)

from .merkle_proofs import (
    MerkleProof,
    MerkleProofHash,
    MerkleVerifier,
    verify_merkle_proof,
)

from .hash_list import (
    HashLinkedList,
    LeafSource,
    hashes_of,
)

from .merkle_tree import (
    NOT_FOUND,
    MerkleTree,
    compute_tree_height,
)


__all__ = [
    # Core types
    "MerkleNode",
    "MerkleTree",
    "MerkleProof",
    "MerkleProofHash",
    "NOT_FOUND",
    # Leaf sources
    "HashLinkedList",
    "LeafSource",
    "hashes_of",
    # Functions
    "edge_leaf_hash",
    "iter_preorder",
    "compute_tree_height",
    "verify_merkle_proof",
    # Convenience classes
    "MerkleVerifier",
]
