"""
Run with: python -m orrery
"""
import sys

from orrery.main import main

if __name__ == "__main__":
    sys.exit(main())
