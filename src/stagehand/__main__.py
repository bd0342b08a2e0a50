from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .app import run_headless
from .exceptions import ConfigurationError
from .utils.logging import configure_logging


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    configure_logging(level)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="stagehand",
        description="Stagehand - headless presentation runner",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--max-steps", type=int, default=None, help="Stop after N ticks")
    parser.add_argument("--tick-rate", type=float, default=60.0, help="Tick rate (Hz); also sets the simulated dt")
    parser.add_argument("--config", default=None, help="Path to a presentation settings YAML file")
    parser.add_argument("--realtime", action="store_true", help="Throttle ticks to wall-clock time")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        return run_headless(
            max_steps=args.max_steps,
            tick_rate=args.tick_rate,
            config_path=args.config,
            realtime=args.realtime,
        )
    except ConfigurationError as e:
        logging.getLogger(__name__).error("%s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
