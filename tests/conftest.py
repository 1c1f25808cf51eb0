"""
Pytest configuration and shared fixtures for hashtree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Keeps the global runtime configuration isolated between tests
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_merkle = importlib.import_module("fixtures.merkle_fixtures")

identity_digest = _merkle.identity_digest
make_items = _merkle.make_items
make_tree = _merkle.make_tree
make_identity_tree = _merkle.make_identity_tree

from hashtree.config import set_default_config

_ENV_VARS = (
    "HASHTREE_DIGEST_ALGORITHM",
    "HASHTREE_ENCODING",
    "HASHTREE_LOG_LEVEL",
    "HASHTREE_DEBUG",
)


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Clear HASHTREE_* env vars and reset the default config around each test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def abc_tree():
    """Identity-digest tree over leaves a, b, c (one sentinel)."""
    return make_identity_tree(["a", "b", "c"])


@pytest.fixture
def abcde_tree():
    """Identity-digest tree over leaves a..e (three sentinels, height 3)."""
    return make_identity_tree(["a", "b", "c", "d", "e"])


@pytest.fixture
def md5_items():
    """Seven distinct items for MD5-backed trees."""
    return make_items(7)


@pytest.fixture
def md5_tree(md5_items):
    """MD5-backed tree over seven items."""
    return make_tree(md5_items)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
