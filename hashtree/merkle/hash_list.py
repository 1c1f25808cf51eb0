"""
Module 03 - Hash Linked List
Ordered leaf source for Merkle trees.

A singly-linked list that stores every item next to its digest. The digest
is computed once, when the item is inserted. Iteration is fail-fast: an
iterator remembers the modification count it started with and raises
ConcurrentModificationException once the list has been changed under it.
"""
from __future__ import annotations

from typing import Any, Generic, Iterator, Optional, Protocol, TypeVar, runtime_checkable

from hashtree.crypto.hashing import Digest, data_to_hash, default_digest
from hashtree.schemas.errors import ConcurrentModificationException

T = TypeVar("T")


@runtime_checkable
class LeafSource(Protocol):
    """Anything that can supply the ordered leaf digests of a tree."""

    @property
    def size(self) -> int: ...

    def get_all_hashes(self) -> Optional[list[str]]: ...


class _Node(Generic[T]):
    def __init__(self, data: T, hash: str) -> None:
        self.data = data
        self.hash = hash
        self.next: Optional[_Node[T]] = None


class HashLinkedList(Generic[T]):
    """
    Linked list of items and their digests.

    Args:
        digest: Digest function applied to inserted items; defaults to the
            configured algorithm (MD5 unless overridden)
    """

    def __init__(self, digest: Optional[Digest] = None) -> None:
        self.digest = digest or default_digest()
        self._head: Optional[_Node[T]] = None
        self._tail: Optional[_Node[T]] = None
        self._size = 0
        self._mod_count = 0

    @property
    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def add_at_head(self, data: T) -> None:
        node = _Node(data, data_to_hash(data, self.digest))
        node.next = self._head
        self._head = node
        if self._tail is None:
            self._tail = node
        self._size += 1
        self._mod_count += 1

    def add_at_tail(self, data: T) -> None:
        node = _Node(data, data_to_hash(data, self.digest))
        if self._tail is None:
            self._head = self._tail = node
        else:
            self._tail.next = node
            self._tail = node
        self._size += 1
        self._mod_count += 1

    def remove(self, data: T) -> bool:
        """Remove the first node holding ``data``; False when not found."""
        previous: Optional[_Node[T]] = None
        current = self._head
        while current is not None:
            if current.data == data:
                if previous is None:
                    self._head = current.next
                else:
                    previous.next = current.next
                if current is self._tail:
                    self._tail = previous
                self._size -= 1
                self._mod_count += 1
                return True
            previous, current = current, current.next
        return False

    def _nodes(self) -> Iterator[_Node[T]]:
        current = self._head
        while current is not None:
            yield current
            current = current.next

    def get_all_hashes(self) -> Optional[list[str]]:
        """Digests in list order, or None when the list is empty."""
        if self._head is None:
            return None
        return [node.hash for node in self._nodes()]

    def build_nodes_string(self) -> Optional[str]:
        """One ``Dato: <data>, Hash: <hash>`` line per node, None when empty."""
        if self._head is None:
            return None
        return "".join(f"Dato: {node.data}, Hash: {node.hash}\n" for node in self._nodes())

    def __iter__(self) -> Iterator[T]:
        # Snapshot taken here, not on the first next()
        return self._iterate(self._mod_count)

    def _iterate(self, expected_mod_count: int) -> Iterator[T]:
        current = self._head
        while True:
            if expected_mod_count != self._mod_count:
                raise ConcurrentModificationException(
                    expected_mod_count=expected_mod_count,
                    actual_mod_count=self._mod_count,
                )
            if current is None:
                return
            data = current.data
            current = current.next
            yield data

    def __repr__(self) -> str:
        return f"HashLinkedList(size={self._size})"


def hashes_of(items: Any, digest: Optional[Digest] = None) -> list[str]:
    """Digest every item of an iterable, preserving order."""
    digest = digest or default_digest()
    return [data_to_hash(item, digest) for item in items]


__all__ = [
    "LeafSource",
    "HashLinkedList",
    "hashes_of",
]
