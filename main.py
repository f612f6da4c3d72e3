"""Repository-level driver for the chatwith CLI."""

from __future__ import annotations

import sys

from chatwith_cli.app import main as cli_main


def main(argv: list[str]) -> int:
    return cli_main(argv)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
