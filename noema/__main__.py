"""Allow ``python -m noema FILE``."""

import sys

from noema.cli import main

if __name__ == '__main__':
    sys.exit(main())
