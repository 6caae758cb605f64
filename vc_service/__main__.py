"""vc_service package entry point."""

import sys

from .commands import run_command


def run(argv):
    """Run the command named by the first argument.

    Without a command name the remaining options are passed to `help`.
    """
    if len(argv) > 1 and argv[1] and not argv[1].startswith("-"):
        run_command(argv[1], argv[2:])
    else:
        run_command(None, argv[1:])


if __name__ == "__main__":
    run(sys.argv)
