"""Allow running as `python -m dualrpc`."""

import sys

from dualrpc.cli import main

if __name__ == "__main__":
    sys.exit(main())
