"""Command line commands of the credential service."""

from importlib import import_module
from os import getenv
from typing import Sequence

PROG = getenv("VCS_COMMAND_NAME", "vc-service")

COMMANDS = {
    "help": "Print available commands",
    "start": "Start the credential service",
}


def available_commands():
    """Index available commands."""
    return [{"name": name, "summary": summary} for name, summary in COMMANDS.items()]


def load_command(command: str):
    """Load the module implementing a named command, if there is one."""
    if command in COMMANDS:
        return import_module(f"{__package__}.{command}")


def run_command(command: str, argv: Sequence[str] = None):
    """Execute a named command with command line arguments."""
    module = load_command(command) or load_command("help")
    module.execute(argv)
