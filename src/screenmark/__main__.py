"""Console entrypoint for the screenmark overlay.

Running ``python -m screenmark`` or the installed ``screenmark`` console
script executes the same code in :mod:`screenmark.cli`.
"""

from __future__ import annotations

import sys

from screenmark.cli import main as cli_main


def main() -> None:
    """Application entrypoint (delegates to :func:`screenmark.cli.main`)."""
    sys.exit(cli_main())


if __name__ == "__main__":
    main()
