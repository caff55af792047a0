"""
Entry point for python -m version_from_git

Allows running the package as a module:
    python -m version_from_git
"""

import sys

from .cli import main

if __name__ == '__main__':
    sys.exit(main())
