"""
Module 03 - Merkle Node
Immutable node of a binary hash tree.

A node is a leaf when it has no children; internal nodes always own
exactly two children. Nodes compare and hash by their digest only, so a
detached node carrying the right digest stands for the subtree it names.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional

from hashtree.schemas.errors import InvalidNodeException


@dataclass(frozen=True)
class MerkleNode:
    """
    A node in a Merkle tree.

    Attributes:
        hash: Hex digest of the node (empty string for padding)
        left: Left child, None for leaves
        right: Right child, None for leaves
    """
    hash: str
    left: Optional[MerkleNode] = field(default=None, compare=False, repr=False)
    right: Optional[MerkleNode] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if (self.left is None) != (self.right is None):
            raise InvalidNodeException(
                "A Merkle node must have both children or none",
                details={"hash": self.hash},
            )

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __str__(self) -> str:
        return self.hash


def iter_preorder(node: MerkleNode) -> Iterator[MerkleNode]:
    """Yield every node of a subtree, parent first, left subtree before right."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        if not current.is_leaf():
            stack.append(current.right)
            stack.append(current.left)


def edge_leaf_hash(node: MerkleNode, leftmost: bool = True) -> str:
    """Hash of the leftmost (or rightmost) leaf under a node."""
    current = node
    while not current.is_leaf():
        current = current.left if leftmost else current.right
    return current.hash


__all__ = [
    "MerkleNode",
    "iter_preorder",
    "edge_leaf_hash",
]
