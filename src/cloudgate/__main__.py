"""Cloudgate main entry point."""

import sys

from cloudgate.cli import main as cli_main


def main() -> int:
    """Main entry point for the application.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
