"""``python -m audo_comp`` runs the batch CLI."""

import sys

from audo_comp import cli


def run() -> int:
    cli.main()
    return 0


if __name__ == "__main__":
    sys.exit(run())
