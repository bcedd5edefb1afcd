"""
Module execution entry point.

Allows running with: python -m authtree_cli
"""

import sys
from authtree_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
