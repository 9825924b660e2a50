from __future__ import annotations

"""
Main Entry Point.

Routes ``complog`` / ``python -m complog.main`` to the CLI controller.
"""

import sys


def main() -> int:
    """
    Delegate to the CLI controller.

    Returns:
        int: Standard process exit code.
    """
    from complog.interface.cli.app import main as cli_main
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
