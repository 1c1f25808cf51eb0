"""
Module 03 - Merkle Proofs
Proof objects and the pure verification fold.

This module provides:
- MerkleProofHash: One step of a proof trail (sibling hash + side)
- MerkleProof: Root hash, expected length and the ordered trail
- verify_merkle_proof: Recompute a root from a starting hash and a proof
- MerkleVerifier: Verification bound to a specific digest function

Trail Ordering:
    The first entry is the sibling nearest the proven node, the last entry
    is the sibling just below the root. A step with is_left=True means the
    sibling sits on the left: parent = combine(sibling, current).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from hashtree.crypto.hashing import Digest, combine_hashes, data_to_hash, default_digest
from hashtree.merkle.merkle_node import MerkleNode
from hashtree.schemas.errors import InvalidArgumentException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MerkleProofHash:
    """
    One step of a Merkle proof.

    Attributes:
        hash: Sibling hash to combine with at this level
        is_left: True when the sibling is the left operand
    """
    hash: str
    is_left: bool

    def __str__(self) -> str:
        return f"{self.hash}{'L' if self.is_left else 'R'}"


@dataclass
class MerkleProof:
    """
    A Merkle proof for a leaf or a branch of a Merkle tree.

    Attributes:
        root_hash: Root hash the proof claims to reconstruct
        length: Number of steps a complete proof carries
        trail: Steps ordered from the proven node up to the root
        digest: Digest function of the tree that issued the proof, used
            when verification is not given one explicitly
    """
    root_hash: str
    length: int
    trail: list[MerkleProofHash] = field(default_factory=list)
    digest: Optional[Digest] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if self.length < 0:
            raise InvalidArgumentException(
                f"Proof length must be non-negative, got {self.length}",
                argument="length",
            )
        if len(self.trail) > self.length:
            raise InvalidArgumentException(
                f"Proof trail has {len(self.trail)} steps but length is {self.length}",
                argument="trail",
            )

    def add_hash(self, hash: str, is_left: bool) -> bool:
        """
        Append a step to the trail.

        Returns:
            False without changing the proof when the trail is already full
        """
        if len(self.trail) >= self.length:
            return False
        self.trail.append(MerkleProofHash(hash, is_left))
        return True

    @property
    def is_complete(self) -> bool:
        return len(self.trail) == self.length

    def prove_validity_of_data(self, item: Any, digest: Optional[Digest] = None) -> bool:
        """Check that the item's digest folds up to the root hash."""
        if item is None:
            return False
        digest = digest or self.digest or default_digest()
        return verify_merkle_proof(data_to_hash(item, digest), self, digest)

    def prove_validity_of_branch(self, branch: Optional[MerkleNode], digest: Optional[Digest] = None) -> bool:
        """Check that the branch hash folds up to the root hash."""
        if branch is None:
            return False
        return verify_merkle_proof(branch.hash, self, digest)

    def __str__(self) -> str:
        steps = ", ".join(str(step) for step in self.trail)
        return f"MerkleProof(root={self.root_hash}, length={self.length}, trail=[{steps}])"


def verify_merkle_proof(start_hash: str, proof: MerkleProof, digest: Optional[Digest] = None) -> bool:
    """
    Verify a Merkle proof.

    Folds the trail over the starting hash with the tree's combine rule
    and compares the result with the proof's root hash.

    Args:
        start_hash: Hash of the leaf or branch being proven
        proof: MerkleProof to verify
        digest: Digest function the tree was built with; defaults to the
            proof's own digest, then the configured default

    Returns:
        True if the trail is complete and reproduces the root hash
    """
    if not proof.is_complete:
        logger.debug(
            f"Incomplete proof: {len(proof.trail)} of {proof.length} steps"
        )
        return False

    digest = digest or proof.digest or default_digest()
    current = start_hash
    for step in proof.trail:
        if step.is_left:
            current = combine_hashes(step.hash, current, digest)
        else:
            current = combine_hashes(current, step.hash, digest)

    return current == proof.root_hash


class MerkleVerifier:
    """
    Verifies proofs produced by trees built with a given digest function.

    Without a digest, each proof is checked with the digest it carries.

    Example:
        >>> verifier = MerkleVerifier(md5_hex)
        >>> verifier.verify_data("item", tree.proof_for("item"))
        True
    """

    def __init__(self, digest: Optional[Digest] = None) -> None:
        self.digest = digest

    def verify(self, start_hash: str, proof: MerkleProof) -> bool:
        return verify_merkle_proof(start_hash, proof, self.digest)

    def verify_data(self, item: Any, proof: MerkleProof) -> bool:
        return proof.prove_validity_of_data(item, self.digest)

    def verify_branch(self, branch: MerkleNode, proof: MerkleProof) -> bool:
        return proof.prove_validity_of_branch(branch, self.digest)


__all__ = [
    "MerkleProofHash",
    "MerkleProof",
    "verify_merkle_proof",
    "MerkleVerifier",
]
