"""CLI entry point for reaction_service.consume.

Usage:
    python -m reaction_service.consume                  # Consume with ./config.json
    python -m reaction_service.consume --verbose        # Show more details
    python -m reaction_service.consume --debug          # Show debug info
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from reaction_service.config.settings import get_settings
from reaction_service.consume.logger import logger
from reaction_service.consume.run import run_consumer
from reaction_service.utils.logging import level_from_flags, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Reaction cascade consumer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m reaction_service.consume
      Consume resource-removed events using config.json

  python -m reaction_service.consume --config /path/to/config.json
      Use a custom config file

  python -m reaction_service.consume --debug
      Enable debug logging including database and redis drivers
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        default="config.json",
        help="Path to config.json (default: config.json)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (DEBUG level)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode with third-party library logs",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Optional file to write logs to (overrides log_file in config)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    log_level, debug_third_party = level_from_flags(args.verbose, args.debug)
    setup_logging(
        level=log_level,
        log_file=args.log_file or get_settings(args.config).log_file,
        debug_third_party=debug_third_party,
    )

    logger.info("Starting reaction cascade consumer")

    try:
        asyncio.run(run_consumer(config_path=args.config))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        raise


if __name__ == "__main__":
    main()
