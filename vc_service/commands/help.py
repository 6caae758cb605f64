"""Help command for indexing available commands."""

from argparse import ArgumentParser
from typing import Sequence

from ..version import __version__


def execute(argv: Sequence[str] = None):
    """Print the version, or the usage of every other command."""
    from . import PROG, available_commands, load_command

    parser = ArgumentParser(prog=PROG)
    parser.add_argument(
        "-v",
        "--version",
        action="store_true",
        help="print application version and exit",
    )
    subparsers = parser.add_subparsers(title="commands", metavar="<command>")
    for cmd in available_commands():
        if cmd["name"] != "help":
            subparser = subparsers.add_parser(cmd["name"], help=cmd["summary"])
            load_command(cmd["name"]).init_argument_parser(subparser)

    args = parser.parse_args(argv)
    if args.version:
        print(__version__)
    else:
        parser.print_help()
