"""
SoulZip CLI entry point.

Usage:
    python -m soulzip.cli calculate < notes.txt
    python -m soulzip.cli completions bash
"""

import sys
from .main import main

if __name__ == "__main__":
    sys.exit(main())
