"""
Module execution entry point.

Allows running with: python -m sve_cli
"""

import sys
from sve_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
