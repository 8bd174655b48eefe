#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Allow ``python -m wxmark``."""

import sys

from wxmark.cli import main

if __name__ == "__main__":
    sys.exit(main())
