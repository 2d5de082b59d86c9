"""
CLI command modules.
"""

from sellsy_cli.commands import api

__all__ = ["api"]
