"""Gluon News - fetch all configured feeds once and print the merged news."""

import argparse
import asyncio
import importlib
import logging
import sys
from datetime import datetime
from pathlib import Path


# ─────────────────────────────────────────────────────────────
# Logging setup
# ─────────────────────────────────────────────────────────────

def setup_logging(level: int = logging.INFO):
    """Configure logging to file."""
    log_dir = Path("logs")
    log_dir.mkdir(exist_ok=True)

    today = datetime.now().strftime("%Y-%m-%d")
    log_file = log_dir / f"{today}.log"

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%H:%M:%S"
    ))

    logging.basicConfig(
        level=level,
        handlers=[file_handler]
    )

    return log_file


settings_mod = importlib.import_module("gluon_news.settings")
pipeline = importlib.import_module("gluon_news.pipeline")
fetch = importlib.import_module("gluon_news.S1_fetch")
deliver = importlib.import_module("gluon_news.S4_deliver")


# ─────────────────────────────────────────────────────────────
# Output formatting
# ─────────────────────────────────────────────────────────────

def print_header():
    """Print run header."""
    now = datetime.now().strftime("%Y-%m-%d %H:%M")
    print()
    print("=" * 62)
    print("                        Gluon News                          ")
    print(f"                     {now}                       ")
    print("=" * 62)
    print()


def print_detail(key: str, value, indent: int = 1):
    """Print a detail line."""
    prefix = "|  " * indent
    print(f"{prefix}- {key}: {value}")


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Gluon News - fetch feeds concurrently and show the newest entries first",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                                  # Feeds from settings.json
  python main.py --feed https://example.org/rss   # Ad-hoc feed list
  python main.py --json out/news.json --html out/news.html
        """
    )

    parser.add_argument(
        "--settings",
        type=str,
        default=None,
        help="Settings JSON path (default: $GLUON_NEWS_SETTINGS or ./settings.json)"
    )

    parser.add_argument(
        "--feed",
        action="append",
        default=None,
        metavar="URL",
        help="Feed URL to fetch instead of the configured list (repeatable)"
    )

    parser.add_argument(
        "--json",
        type=str,
        default=None,
        help="Also write entries to this JSON file"
    )

    parser.add_argument(
        "--html",
        type=str,
        default=None,
        help="Also write an HTML page to this file"
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print entries to the console"
    )

    return parser.parse_args(argv)


async def _run_cycle(settings):
    async with fetch.create_client(settings) as client:
        return await pipeline.run_cycle(
            list(settings.feeds),
            client=client,
            user_agent=settings.user_agent,
        )


def run(args=None) -> int:
    """
    Run one fetch cycle and deliver the result.

    Returns:
        Exit status: 0 when entries are available, 1 otherwise
    """
    if args is None:
        args = parse_args()

    log_file = setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("=" * 60)
    logger.info("Gluon News started")

    settings = settings_mod.load_settings(args.settings)
    if args.feed:
        settings = settings.model_copy(update={"feeds": args.feed})

    if not args.quiet:
        print_header()
        print_detail("Feeds", len(settings.feeds))

    result = asyncio.run(_run_cycle(settings))
    stats = result.stats()

    if not args.quiet:
        print_detail("Fetched", f"{result.fetched}/{result.requested}")
        print_detail("Parsed", result.parsed)
        print_detail("Entries", stats["entries"])
        deliver.to_console(result.entries, stats)

    if args.json:
        deliver.to_json(result.entries, args.json)
        logger.info(f"JSON saved to {args.json}")

    if args.html:
        deliver.to_html_file(result.entries, args.html, stats, maximized=settings.maximized)
        logger.info(f"HTML saved to {args.html}")

    logger.info("Gluon News completed")
    logger.info("=" * 60)
    if not args.quiet:
        print(f"[OK] Done! (log: {log_file})")

    return 0 if result.available else 1


if __name__ == "__main__":
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)
