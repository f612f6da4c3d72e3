"""Module entrypoint for ``python -m chatwith_cli``."""

from __future__ import annotations

import sys

from .app import main


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
