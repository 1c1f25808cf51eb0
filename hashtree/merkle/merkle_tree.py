"""
Module 03 - Merkle Tree Implementation
Balanced Merkle tree construction, lookup, validation and proof generation.

This module provides:
- MerkleTree: Immutable hash tree over an ordered sequence of leaf digests
- NOT_FOUND: Index returned when a digest is not a leaf of the tree

Construction Rules (Hard Contracts):
1. Leaves keep input order; positions start at 0
2. The leaf level is padded to the next power of two with sentinel
   leaves whose hash is the empty string
3. Parent hash = combine(left, right): empty if both children are empty,
   digest(left + right) otherwise
4. height = smallest h with 2**h >= width (0 for a single leaf)
5. A repeated leaf digest maps to its last position

Search Order:
    Every search over nodes (branch validation, proof paths, relative
    indexing) is preorder with the left subtree first, so when a digest
    occurs more than once the leftmost, shallowest node wins.

Determinism Notes:
- The root hash depends only on the ordered leaf digests and the digest
  function
- The tree is never mutated after construction and is safe to share
  between threads
"""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Generic, Iterable, Mapping, Optional, Sequence, TypeVar, Union

from hashtree.crypto.hashing import (
    SENTINEL_HASH,
    Digest,
    combine_hashes,
    data_to_hash,
    default_digest,
)
from hashtree.merkle.hash_list import LeafSource, hashes_of
from hashtree.merkle.merkle_node import MerkleNode, edge_leaf_hash, iter_preorder
from hashtree.merkle.merkle_proofs import MerkleProof
from hashtree.schemas.errors import (
    BranchNotFoundException,
    EmptyLeafSourceException,
    InvalidArgumentException,
    TreeShapeMismatchException,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Index returned by lookups when the digest is not a leaf of the tree
NOT_FOUND: int = -1


def compute_tree_height(width: int) -> int:
    """
    Smallest height whose perfect tree holds ``width`` leaves.

    Example:
        >>> [compute_tree_height(n) for n in (1, 2, 3, 4, 5)]
        [0, 1, 2, 2, 3]
    """
    if width < 1:
        raise InvalidArgumentException(
            f"Tree width must be at least 1, got {width}",
            argument="width",
        )
    return (width - 1).bit_length()


class MerkleTree(Generic[T]):
    """
    Merkle tree over an ordered collection of data items.

    Args:
        source: A LeafSource (e.g. HashLinkedList) or an ordered sequence
            of leaf digests
        digest: Digest function for parent hashes and item lookups;
            defaults to the source's digest, then to the configured one

    Raises:
        EmptyLeafSourceException: If the source is None or has no leaves

    Example:
        >>> tree = MerkleTree.from_items(["a", "b", "c"])
        >>> tree.width, tree.height
        (3, 2)
        >>> tree.index_of("b")
        1
    """

    def __init__(
        self,
        source: Union[LeafSource, Sequence[str], None],
        digest: Optional[Digest] = None,
    ) -> None:
        if source is None:
            raise EmptyLeafSourceException()
        if isinstance(source, (str, bytes)):
            raise InvalidArgumentException(
                "Leaf digests must be given as a sequence, not a single string",
                argument="source",
            )

        if isinstance(source, LeafSource):
            hashes = source.get_all_hashes() or []
        else:
            hashes = list(source)
        if not hashes:
            raise EmptyLeafSourceException()

        self._digest: Digest = digest or getattr(source, "digest", None) or default_digest()
        self._width = len(hashes)
        self._height = compute_tree_height(self._width)
        self._leaf_hashes: tuple[str, ...] = tuple(hashes)
        self._index_map: dict[str, int] = {}
        self._root = self._build(self._leaf_hashes)

        logger.debug(
            f"Built Merkle tree: width={self._width}, height={self._height}, "
            f"root={self._root.hash}"
        )

    @classmethod
    def from_hashes(cls, hashes: Sequence[str], digest: Optional[Digest] = None) -> "MerkleTree[T]":
        """Build a tree directly from ordered leaf digests."""
        return cls(hashes, digest)

    @classmethod
    def from_items(cls, items: Iterable[T], digest: Optional[Digest] = None) -> "MerkleTree[T]":
        """Digest each item in order and build a tree over the results."""
        digest = digest or default_digest()
        return cls(hashes_of(items, digest), digest)

    def _build(self, hashes: Sequence[str]) -> MerkleNode:
        level: list[MerkleNode] = []
        for position, leaf_hash in enumerate(hashes):
            if leaf_hash in self._index_map:
                logger.warning(
                    f"Duplicate leaf digest {leaf_hash} at positions "
                    f"{self._index_map[leaf_hash]} and {position}; keeping {position}"
                )
            self._index_map[leaf_hash] = position
            level.append(MerkleNode(leaf_hash))

        padding = (1 << self._height) - self._width
        level.extend(MerkleNode(SENTINEL_HASH) for _ in range(padding))
        if padding:
            logger.debug(f"Padded leaf level with {padding} sentinel leaves")

        for _ in range(self._height):
            level = [
                MerkleNode(
                    combine_hashes(left.hash, right.hash, self._digest),
                    left,
                    right,
                )
                for left, right in zip(level[0::2], level[1::2])
            ]

        return level[0]

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def root(self) -> MerkleNode:
        return self._root

    @property
    def width(self) -> int:
        """Number of real (non-padding) leaves."""
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def digest(self) -> Digest:
        return self._digest

    @property
    def index_map(self) -> Mapping[str, int]:
        """Read-only view of leaf digest to position."""
        return MappingProxyType(self._index_map)

    @property
    def leaf_hashes(self) -> tuple[str, ...]:
        """Real leaf digests in position order, duplicates included."""
        return self._leaf_hashes

    # =========================================================================
    # Index / Lookup
    # =========================================================================

    def index_of(self, item: T) -> int:
        """
        Position of an item among the leaves.

        Returns:
            0-based index, or NOT_FOUND when the item's digest is not a leaf

        Raises:
            InvalidArgumentException: If item is None
        """
        if item is None:
            raise InvalidArgumentException("Cannot look up a None item", argument="item")
        return self._index_map.get(data_to_hash(item, self._digest), NOT_FOUND)

    def index_of_in_branch(self, branch: MerkleNode, item: T) -> int:
        """
        Position of an item relative to the first leaf of a branch.

        A branch whose leftmost leaf is padding never contains the item.
        A rightmost padding leaf stands for the last real leaf.

        Returns:
            Offset from the branch's leftmost leaf, or NOT_FOUND when the
            item is not a leaf under the branch

        Raises:
            InvalidArgumentException: If branch or item is None
            BranchNotFoundException: If branch is not a node of this tree
        """
        if branch is None or item is None:
            raise InvalidArgumentException(
                "Branch and item are required",
                argument="branch" if branch is None else "item",
            )

        node = self._find_node(branch.hash)
        if node is None:
            raise BranchNotFoundException(
                "Branch is not part of this tree",
                branch_hash=branch.hash,
            )

        left_hash = edge_leaf_hash(node, leftmost=True)
        if left_hash == SENTINEL_HASH:
            return NOT_FOUND

        item_index = self._index_map.get(data_to_hash(item, self._digest))
        if item_index is None:
            return NOT_FOUND

        right_hash = edge_leaf_hash(node, leftmost=False)
        left_index = self._index_map[left_hash]
        right_index = (
            self._width - 1 if right_hash == SENTINEL_HASH else self._index_map[right_hash]
        )
        if left_index <= item_index <= right_index:
            return item_index - left_index
        return NOT_FOUND

    # =========================================================================
    # Validation
    # =========================================================================

    def validate_data(self, item: Optional[T]) -> bool:
        """True when the item's digest is one of the real leaves."""
        if item is None:
            return False
        return data_to_hash(item, self._digest) in self._index_map

    def validate_branch(self, branch: Optional[MerkleNode]) -> bool:
        """True when some node of this tree carries the branch's hash."""
        if branch is None:
            return False
        return self._find_node(branch.hash) is not None

    def validate_tree(self, other: "MerkleTree[T]") -> bool:
        """
        Check that another tree holds exactly the same nodes as this one.

        Returns:
            False when heights differ or any pair of nodes disagrees on
            hash or leaf status

        Raises:
            InvalidArgumentException: If other is None
        """
        if other is None:
            raise InvalidArgumentException("Cannot validate against a None tree", argument="other")
        if self._height != other.height:
            return False

        stack = [(self._root, other.root)]
        while stack:
            mine, theirs = stack.pop()
            if mine != theirs or mine.is_leaf() != theirs.is_leaf():
                return False
            if not mine.is_leaf():
                stack.append((mine.right, theirs.right))
                stack.append((mine.left, theirs.left))
        return True

    def find_invalid_data_indices(self, other: "MerkleTree[T]") -> set[int]:
        """
        Positions of this tree whose leaf is missing or misplaced in ``other``.

        Every position is checked, so an earlier copy of a repeated digest
        is reported when ``other`` holds something else there.

        Raises:
            InvalidArgumentException: If other is None
            TreeShapeMismatchException: If the trees have different heights
        """
        if other is None:
            raise InvalidArgumentException("Cannot compare against a None tree", argument="other")
        if self._height != other.height:
            raise TreeShapeMismatchException(
                "Trees have different shapes",
                expected_height=self._height,
                actual_height=other.height,
            )

        other_map = other.index_map
        other_leaves = other.leaf_hashes
        invalid = {
            position
            for position, leaf_hash in enumerate(self._leaf_hashes)
            if other_map.get(leaf_hash) != position
            and (position >= len(other_leaves) or other_leaves[position] != leaf_hash)
        }
        if invalid:
            logger.debug(f"Found {len(invalid)} invalid data indices")
        return invalid

    # =========================================================================
    # Proofs
    # =========================================================================

    def proof_for(self, item: T) -> MerkleProof:
        """
        Merkle proof for a data item.

        Raises:
            InvalidArgumentException: If item is None or not part of the tree
        """
        if item is None:
            raise InvalidArgumentException("Cannot prove a None item", argument="item")
        return self.proof_for_branch(MerkleNode(data_to_hash(item, self._digest)))

    def proof_for_branch(self, branch: MerkleNode) -> MerkleProof:
        """
        Merkle proof for a branch (any node, leaf or internal).

        The trail lists the sibling hashes met walking from the branch up to
        the root.

        Raises:
            InvalidArgumentException: If branch is None
            BranchNotFoundException: If branch is not a node of this tree
        """
        if branch is None:
            raise InvalidArgumentException("Cannot prove a None branch", argument="branch")

        path = self._find_path(branch.hash)
        if path is None:
            raise BranchNotFoundException(
                "Branch is not part of this tree",
                branch_hash=branch.hash,
            )

        proof = MerkleProof(self._root.hash, len(path) - 1, digest=self._digest)
        for parent, child in zip(reversed(path[:-1]), reversed(path[1:])):
            if parent.left is child:
                proof.add_hash(parent.right.hash, False)
            else:
                proof.add_hash(parent.left.hash, True)

        logger.debug(f"Generated proof with {proof.length} steps for {branch.hash}")
        return proof

    # =========================================================================
    # Search helpers
    # =========================================================================

    def _find_node(self, target_hash: str) -> Optional[MerkleNode]:
        for node in iter_preorder(self._root):
            if node.hash == target_hash:
                return node
        return None

    def _find_path(self, target_hash: str) -> Optional[list[MerkleNode]]:
        """Root-to-node path of the first preorder match, or None."""
        path: list[MerkleNode] = []
        stack = [(self._root, 0)]
        while stack:
            node, depth = stack.pop()
            del path[depth:]
            path.append(node)
            if node.hash == target_hash:
                return path
            if not node.is_leaf():
                stack.append((node.right, depth + 1))
                stack.append((node.left, depth + 1))
        return None

    def __repr__(self) -> str:
        return f"MerkleTree(width={self._width}, height={self._height}, root={self._root.hash!r})"


__all__ = [
    "NOT_FOUND",
    "MerkleTree",
    "compute_tree_height",
]
