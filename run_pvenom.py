#!/usr/bin/env python3

"""
pvenom runner script.
Allows direct execution without installation.
"""

import sys
import os

# Make the pvenom package next to this script importable
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

try:
    from pvenom.cli import main
except ImportError as e:
    print(f"Error importing package: {e}")
    print(f"Python path: {sys.path}")
    sys.exit(1)

if __name__ == "__main__":
    sys.exit(main())
