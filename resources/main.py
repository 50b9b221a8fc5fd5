"""
Pen Compatibility Matrix - Main Application Entry Point

Run from the resources directory: python main.py [SOURCE ...] [--cli | --report]
"""

import sys

from pen_compat_matrix.app import main


if __name__ == "__main__":
    sys.exit(main())
