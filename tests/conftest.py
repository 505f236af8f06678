"""
Pytest configuration and shared fixtures for sve tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
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

_common = importlib.import_module("fixtures.common")

make_test_keypair = _common.make_test_keypair
make_other_keypair = _common.make_other_keypair
make_raw_message = _common.make_raw_message
make_signed = _common.make_signed


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def keypair():
    """Provide the fixed RFC 8032 TEST 1 key pair."""
    return make_test_keypair()


@pytest.fixture
def other_keypair():
    """Provide a second fixed key pair (RFC 8032 TEST 2)."""
    return make_other_keypair()


@pytest.fixture
def raw_message():
    """Provide a multi-line LF-terminated message body."""
    return make_raw_message()


@pytest.fixture
def signed_hello():
    """Provide the SignResult for b"hello\\n" under the test key pair."""
    return make_signed(b"hello\n")


@pytest.fixture(autouse=True)
def _isolate_sve_env(monkeypatch):
    """Keep SVE_* variables from the developer's shell out of tests."""
    import os
    for name in list(os.environ):
        if name.startswith("SVE_"):
            monkeypatch.delenv(name, raising=False)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
