"""Entry point for ``python -m sshit``."""

import sys

from sshit.cli import main

if __name__ == "__main__":
    sys.exit(main())
