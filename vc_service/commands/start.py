"""Start command: run the credential service until it is signalled to stop."""

import asyncio
import logging
import signal
from typing import Coroutine, Sequence

from configargparse import ArgumentParser

from ..config import argparse as arg
from ..config.settings import Settings
from ..config.util import common_config
from ..core.conductor import Conductor
from . import PROG

LOGGER = logging.getLogger(__name__)


async def start_app(conductor: Conductor):
    """Start up."""
    await conductor.setup()
    await conductor.start()


async def shutdown_app(conductor: Conductor):
    """Shut down."""
    print("\nShutting down")
    await conductor.stop()


def init_argument_parser(parser: ArgumentParser):
    """Initialize an argument parser with the module's arguments."""
    return arg.load_argument_groups(parser, *arg.group.get_registered(arg.CAT_START))


def execute(argv: Sequence[str] = None):
    """Parse the settings, configure logging and serve the credential API."""
    parser = arg.create_argument_parser(prog=f"{PROG} start")
    get_settings = init_argument_parser(parser)
    args = parser.parse_args(argv)
    settings = Settings(get_settings(args))
    common_config(settings)

    conductor = Conductor(settings)
    run_loop(start_app(conductor), shutdown_app(conductor))


def run_loop(startup: Coroutine, shutdown: Coroutine):
    """Run `startup`, wait for SIGTERM or SIGINT, then run `shutdown`.

    A failed startup is logged and shuts down straight away.
    """

    async def serve():
        stopping = asyncio.Event()
        loop = asyncio.get_running_loop()
        for signum in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(signum, stopping.set)

        try:
            await startup
        except Exception:
            LOGGER.exception("Exception during startup:")
        else:
            await stopping.wait()
        finally:
            await shutdown

    asyncio.run(serve())
