"""
envconfig – Main entry point.

Loads AppConfig once at startup and hands it to the rest of the program.
If any variable is missing or invalid, the process exits with status 1 and a
message naming the offending key.

**Usage**:
    HOME=/ DESTROY_DATABASE=false COUNT=3 python main.py
    python main.py --env-file .env
    python main.py --env-file .env --verbose

**Example output**:
    $ DESTROY_DATABASE=yes COUNT=1 python main.py
    Configuration error: DESTROY_DATABASE must be a boolean (one of: true, false, 1, 0), got: 'yes' (unrecognised boolean literal)
"""

import argparse
import logging
import sys
from typing import List, Optional

from src.config.environment import load_environment
from src.config.errors import ConfigError
from src.config.settings import AppConfig


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Validate environment configuration and print the loaded settings.",
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="Read variables from this .env file (process environment still wins)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def describe_settings(config: AppConfig) -> List[str]:
    """
    Summarise a loaded configuration, one line per setting.

    Receives the config explicitly instead of reading the environment, which
    is the pattern every consumer of AppConfig should follow.
    """
    lines = [f"HOME: {config.HOME}", f"COUNT: {config.COUNT}"]
    if config.DESTROY_DATABASE:
        lines.append("DESTROY_DATABASE: true (database will be dropped)")
    else:
        lines.append("DESTROY_DATABASE: false")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    """
    Load configuration and print it.

    Returns:
        0 on success, 1 if the configuration could not be loaded.
    """
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    try:
        environ = load_environment(args.env_file) if args.env_file else None
        config = AppConfig.from_env(environ)
    except (ConfigError, FileNotFoundError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    print("Configuration loaded:")
    for line in describe_settings(config):
        print(f"  ✓ {line}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
