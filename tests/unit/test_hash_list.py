"""
Module 03 - Hash Linked List Unit Tests
Tests for hashtree/merkle/hash_list.py
"""
import hashlib

import pytest

from fixtures import identity_digest, make_hash_list
from hashtree.crypto.hashing import md5_hex
from hashtree.merkle.hash_list import HashLinkedList, LeafSource, hashes_of
from hashtree.schemas.errors import ConcurrentModificationException


def _md5(text: str) -> str:
    return hashlib.md5(text.encode("utf-8")).hexdigest()


class TestInsertion:
    """Tests for add_at_head() / add_at_tail()."""

    def test_add_at_tail_keeps_order(self):
        hash_list = make_hash_list(["a", "b", "c"])

        assert list(hash_list) == ["a", "b", "c"]
        assert hash_list.size == 3
        assert len(hash_list) == 3

    def test_add_at_head_prepends(self):
        hash_list = HashLinkedList(md5_hex)
        hash_list.add_at_head("b")
        hash_list.add_at_head("a")
        hash_list.add_at_tail("c")

        assert list(hash_list) == ["a", "b", "c"]

    def test_hashes_computed_on_insert(self):
        hash_list = make_hash_list(["a", "b"])

        assert hash_list.get_all_hashes() == [_md5("a"), _md5("b")]

    def test_custom_digest(self):
        hash_list = make_hash_list(["x", "y"], identity_digest)

        assert hash_list.get_all_hashes() == ["x", "y"]

    def test_non_text_items_are_canonicalized(self):
        hash_list = make_hash_list([{"b": 2, "a": 1}], identity_digest)

        assert hash_list.get_all_hashes() == ['{"a":1,"b":2}']


class TestEmptyList:
    """Tests for the empty-list indicators."""

    def test_no_hashes(self):
        assert HashLinkedList(md5_hex).get_all_hashes() is None

    def test_no_nodes_string(self):
        assert HashLinkedList(md5_hex).build_nodes_string() is None

    def test_iterates_nothing(self):
        assert list(HashLinkedList(md5_hex)) == []


class TestRemove:
    """Tests for remove()."""

    def test_remove_head(self):
        hash_list = make_hash_list(["a", "b", "c"])

        assert hash_list.remove("a") is True
        assert list(hash_list) == ["b", "c"]

    def test_remove_middle(self):
        hash_list = make_hash_list(["a", "b", "c"])

        assert hash_list.remove("b") is True
        assert hash_list.get_all_hashes() == [_md5("a"), _md5("c")]

    def test_remove_tail_then_append(self):
        """Removing the tail moves the tail pointer back."""
        hash_list = make_hash_list(["a", "b", "c"])

        assert hash_list.remove("c") is True
        hash_list.add_at_tail("d")

        assert list(hash_list) == ["a", "b", "d"]

    def test_remove_only_element(self):
        hash_list = make_hash_list(["a"])

        assert hash_list.remove("a") is True
        assert hash_list.size == 0
        assert hash_list.get_all_hashes() is None
        hash_list.add_at_tail("b")
        assert list(hash_list) == ["b"]

    def test_remove_first_occurrence_only(self):
        hash_list = make_hash_list(["a", "b", "a"])

        hash_list.remove("a")

        assert list(hash_list) == ["b", "a"]

    def test_remove_missing(self):
        hash_list = make_hash_list(["a"])

        assert hash_list.remove("z") is False
        assert HashLinkedList(md5_hex).remove("z") is False


class TestNodesString:
    """Tests for build_nodes_string()."""

    def test_format(self):
        hash_list = make_hash_list(["ciao", "hello"])

        assert hash_list.build_nodes_string() == (
            f"Dato: ciao, Hash: {_md5('ciao')}\n"
            f"Dato: hello, Hash: {_md5('hello')}\n"
        )


class TestFailFastIteration:
    """Iterators raise once the list changes under them."""

    def test_add_during_iteration_raises(self):
        hash_list = make_hash_list(["a", "b", "c"])
        iterator = iter(hash_list)

        assert next(iterator) == "a"
        hash_list.add_at_tail("d")

        with pytest.raises(ConcurrentModificationException):
            next(iterator)

    def test_remove_during_iteration_raises(self):
        hash_list = make_hash_list(["a", "b", "c"])

        with pytest.raises(ConcurrentModificationException):
            for item in hash_list:
                hash_list.remove(item)

    def test_modification_before_first_step_raises(self):
        hash_list = make_hash_list(["a"])
        iterator = iter(hash_list)
        hash_list.add_at_head("z")

        with pytest.raises(ConcurrentModificationException) as exc_info:
            next(iterator)

        assert exc_info.value.details == {"expected_mod_count": 1, "actual_mod_count": 2}

    def test_failed_remove_does_not_invalidate(self):
        hash_list = make_hash_list(["a", "b"])
        iterator = iter(hash_list)
        hash_list.remove("missing")

        assert list(iterator) == ["a", "b"]


class TestLeafSourceProtocol:
    """HashLinkedList satisfies the leaf source contract."""

    def test_is_leaf_source(self):
        assert isinstance(make_hash_list(["a"]), LeafSource)

    def test_plain_list_is_not_leaf_source(self):
        assert not isinstance(["a"], LeafSource)

    def test_hashes_of(self):
        assert hashes_of(["a", "b"], md5_hex) == [_md5("a"), _md5("b")]
