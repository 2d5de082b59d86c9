"""
Module execution entry point.

Allows running with: python -m sellsy_cli
"""

import sys
from sellsy_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
