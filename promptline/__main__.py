"""Allow running promptline with ``python -m promptline``."""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
