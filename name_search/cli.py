from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import Settings, find_config
from .search import NameSearch

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


def _configure_logging(level_name: str) -> None:
    log_level = getattr(logging, level_name.upper(), logging.WARNING)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    handler = logging.StreamHandler(sys.stderr)
    if sys.stderr.isatty():
        handler.setFormatter(ColorFormatter(LOG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)


def _read_candidates(path: Path) -> list[str]:
    with path.open("r", encoding="utf-8") as fh:
        return [line.strip() for line in fh if line.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="name-search",
        description="Find the name in a list that best matches a possibly misspelled query",
    )
    parser.add_argument("query", help="Name to look for")
    parser.add_argument("names", nargs="*", help="Candidate names (alternative to --candidates)")
    parser.add_argument("--candidates", type=Path, help="File with one candidate name per line")
    parser.add_argument("--config", type=Path, help="Path to name_search.yaml")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")
    parser.add_argument(
        "--explain",
        action="store_true",
        help="Also print which matcher decided and how confident it was",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.candidates and args.names:
        parser.error("pass candidate names either positionally or with --candidates, not both")

    _configure_logging(args.log_level)

    config_path = find_config(args.config)
    settings = Settings.load(config_path) if config_path else Settings()
    candidates = _read_candidates(args.candidates) if args.candidates else list(args.names)
    logger.info("Searching %d candidates for %r", len(candidates), args.query)

    result = NameSearch(settings).find(candidates, args.query)
    if result is None:
        return 1
    print(result.candidate)
    if args.explain:
        print(f"  matcher: {result.strategy}")
        print(f"  confidence: {result.confidence:.3f}")
        if result.details:
            print(f"  details: {result.details}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
