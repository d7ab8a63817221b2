"""``python -m chesslink`` entry point."""

import sys

from chesslink.cli import main

sys.exit(main())
