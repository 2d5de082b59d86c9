"""
Test fixtures package for Sellsy client tests.

Provides factory functions and doubles for creating test objects:
- common.py: credentials, fixed clock, canned HTTP responses, stub executor

Usage:
    from fixtures import make_credentials, StubExecutor

    def test_something():
        executor = StubExecutor.returning({"status": "success", "response": {}})
        client = SellsyClient(make_credentials(), executor=executor)
"""

from .common import (
    FIXED_NOW,
    FIXED_TIMESTAMP,
    StubExecutor,
    fixed_clock,
    make_credentials,
    make_response,
)

__all__ = [
    "FIXED_NOW",
    "FIXED_TIMESTAMP",
    "StubExecutor",
    "fixed_clock",
    "make_credentials",
    "make_response",
]
