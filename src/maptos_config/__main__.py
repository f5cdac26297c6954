"""
Maptos node configuration CLI entry point.

Resolve the node's boot-time configuration from the environment and print it
as JSON. Any malformed input aborts with a diagnostic naming the offending
variable and the form it expects.

Usage::

    python -m maptos_config
    python -m maptos_config --env-file node.env
    MAPTOS_CHAIN_ID=testnet python -m maptos_config --show-private-key

Options:
    --env-file          .env file layered over the process environment
    --show-private-key  Include the encoded identity key in the output
    -v, --verbose       Enable debug logging
    --no-color          Disable colored logging output
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from maptos_config.env import EnvironmentSnapshot
from maptos_config.node import MaptosConfig
from maptos_config.types import ConfigError

logger = logging.getLogger(__name__)


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    # ANSI color codes
    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)

        timestamp = self.formatTime(record, self.datefmt)
        colored_time = f"{self.CYAN}{timestamp}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"

        return f"{colored_time} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure logging to stderr, leaving stdout for the JSON output."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def load_snapshot(env_file: Path | None) -> EnvironmentSnapshot:
    """
    Build the input snapshot for this run.

    Without an env file this is the process environment. With one, the
    file's entries take precedence over the process environment.
    """
    snapshot = EnvironmentSnapshot.from_os()
    if env_file is None:
        return snapshot
    return EnvironmentSnapshot.from_env_file(env_file, base=snapshot)


def run(env_file: Path | None = None, show_private_key: bool = False) -> int:
    """
    Resolve and print the configuration.

    Returns:
        Process exit status: 0 on success, 1 on any configuration error.
    """
    try:
        snapshot = load_snapshot(env_file)
    except (OSError, ValueError) as e:
        logger.error("Cannot read env file: %s", e)
        return 1

    try:
        config = MaptosConfig.from_env(snapshot)
    except ConfigError as e:
        logger.error("Invalid node configuration: %s", e.message)
        return 1

    logger.info(
        "Resolved configuration for chain %s, account %s",
        config.chain.chain_id,
        config.chain.account_address,
    )
    json.dump(config.to_json_dict(include_private_key=show_private_key), sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Resolve Maptos node configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help=".env file layered over the process environment",
    )
    parser.add_argument(
        "--show-private-key",
        action="store_true",
        help="Include the encoded identity key in the output",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )

    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    sys.exit(run(args.env_file, args.show_private_key))


if __name__ == "__main__":
    main()
