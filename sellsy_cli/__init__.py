"""
Sellsy CLI

Command-line interface for the Sellsy API client.

Usage:
    python -m sellsy_cli call Document.getList --params '{"doctype": "invoice"}'
    python -m sellsy_cli infos
    python -m sellsy_cli modules
    python -m sellsy_cli config --init
"""

__version__ = "0.1.0"
