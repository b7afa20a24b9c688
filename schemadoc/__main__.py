"""
Entry point for running schemadoc as a module.

Usage:
    python -m schemadoc <command> [options]
"""

import sys

from schemadoc.cli import main

if __name__ == "__main__":
    sys.exit(main())
