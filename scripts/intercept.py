#!/usr/bin/env python3
"""
Compute a maneuvering board intercept solution from the command line.

Usage:
    python scripts/intercept.py --target 10,0 --target-velocity 0,5 --speed 13
    python scripts/intercept.py --target 10,0 --target-velocity 0,5 --verbose
"""

import sys
from pathlib import Path

# Add repository root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from maneuvering_board.cli import main


if __name__ == "__main__":
    sys.exit(main())
