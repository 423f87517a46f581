from __future__ import annotations

"""Repo-root convenience shim for launching ConcurrencyLab.

This keeps the most common local workflow short:

    python runner.py p 8 1000000 8

It delegates to the canonical entry point:

    python -m concurrencylab
"""

import sys


def main() -> int:
    """Run the ConcurrencyLab CLI.

    Arguments are forwarded exactly as in `python -m concurrencylab`.
    """

    from concurrencylab.cli import main as cli_main

    return cli_main(sys.argv[1:])


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
