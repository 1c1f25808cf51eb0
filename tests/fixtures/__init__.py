"""
Test fixtures package for hashtree tests.

This package provides factory functions for creating test objects:
- merkle_fixtures.py: digest stubs, leaf lists and trees

Usage:
    from fixtures import make_identity_tree

    def test_something():
        tree = make_identity_tree(["a", "b", "c"])
        assert tree.root.hash == "abc"
"""

from .merkle_fixtures import (
    identity_digest,
    make_items,
    make_hash_list,
    make_tree,
    make_identity_tree,
)

__all__ = [
    "identity_digest",
    "make_items",
    "make_hash_list",
    "make_tree",
    "make_identity_tree",
]
