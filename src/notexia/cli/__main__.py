"""Entry point for ``python -m notexia.cli``."""

import sys

from .notexia_vault import main

if __name__ == "__main__":
    sys.exit(main())
