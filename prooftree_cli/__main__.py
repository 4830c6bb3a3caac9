"""
Module execution entry point.

Allows running with: python -m prooftree_cli
"""

import sys
from prooftree_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
