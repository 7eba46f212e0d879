"""Entry point for running fastev as a module.

This file allows the event table inspector to be run with: python -m fastev
"""

import sys

from fastev.cli import main

if __name__ == "__main__":
    sys.exit(main())
