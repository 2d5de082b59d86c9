"""
Pytest configuration and shared fixtures for Sellsy client tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import os
import random
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

from fixtures import StubExecutor, fixed_clock, make_credentials  # noqa: E402

from sellsy.client import SellsyClient  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def credentials():
    """Provide default OAuthCredentials for tests."""
    return make_credentials()


@pytest.fixture
def make_client(credentials):
    """Factory for clients with a fixed clock and a seeded random source."""
    def _make(executor=None, **kwargs):
        kwargs.setdefault("clock", fixed_clock)
        kwargs.setdefault("rng", random.Random(1234))
        return SellsyClient(
            credentials,
            executor=executor or StubExecutor.returning({"status": "success"}),
            **kwargs,
        )
    return _make


@pytest.fixture(autouse=True)
def isolate_sellsy_env(monkeypatch):
    """Keep SELLSY_* variables from the developer's shell out of tests."""
    for name in list(os.environ):
        if name.startswith("SELLSY_"):
            monkeypatch.delenv(name, raising=False)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
