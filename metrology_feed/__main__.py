"""
CLI entry point for metrology-feed.

Usage:
    python -m metrology_feed
    python -m metrology_feed --type science --limit 5
    python -m metrology_feed --output output/feed.json
"""

import argparse
import asyncio
import json
import logging
import sys

import structlog

from metrology_feed.core.models import LayoutKind

# Log level mapping
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def setup_logging(level: str = "INFO", json_output: bool = False):
    """Configure structured logging (always to stderr, stdout carries the feed)."""
    log_level = LOG_LEVELS.get(level.upper(), logging.INFO)

    if json_output:
        renderer = structlog.processors.JSONRenderer()
        timestamper = structlog.processors.TimeStamper(fmt="iso")
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        timestamper = structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S")

    structlog.configure(
        processors=[
            timestamper,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def non_negative_int(value: str) -> int:
    """argparse type for non-negative integers."""
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0: {value}")
    return number


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Feed of the SAMR Department of Metrology (国家市场监督管理总局计量司)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Legal metrology, 10 items, printed to stdout
  python -m metrology_feed

  # Scientific metrology, 5 items
  python -m metrology_feed --type science --limit 5

  # Write to file with JSON logs
  python -m metrology_feed --output output/feed.json --json-logs
        """,
    )

    parser.add_argument(
        "--type",
        choices=[kind.value for kind in LayoutKind],
        default=LayoutKind.LEGAL.value,
        help="Listing type: legal (法制计量) or science (科学计量) (default: legal)",
    )

    parser.add_argument(
        "--limit",
        type=non_negative_int,
        default=10,
        help="Maximum number of items (default: 10)",
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to sources.yml config file",
    )

    parser.add_argument(
        "--output",
        type=str,
        help="Write feed JSON to this file instead of stdout",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Output logs as JSON (for production)",
    )

    parser.add_argument(
        "--rate-limit",
        type=float,
        help="Requests per second per domain (default: from config)",
    )

    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version and exit",
    )

    return parser.parse_args(argv)


async def main_async(args):
    """Async main function."""
    from .orchestrator import build_feed, save_json

    logger = structlog.get_logger(__name__)

    feed = await build_feed(
        layout=args.type,
        limit=args.limit,
        config_path=args.config,
        requests_per_second=args.rate_limit,
    )

    if args.output:
        save_json(feed, args.output)
    else:
        json.dump(feed.to_dict(), sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")

    if not feed.items:
        logger.warning("feed_empty", type=args.type)

    return feed


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    if args.version:
        from . import __version__
        print(f"metrology-feed {__version__}")
        sys.exit(0)

    setup_logging(args.log_level, args.json_logs)

    try:
        asyncio.run(main_async(args))
        sys.exit(0)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        logger = structlog.get_logger(__name__)
        logger.exception("fatal_error", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
