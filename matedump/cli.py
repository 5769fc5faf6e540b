from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from .commands import doctor as cmd_doctor
from .commands import extract as cmd_extract
from .config import Settings, find_config
from .models import MatedumpError

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


def configure_logging(level_name: str) -> None:
    log_level = getattr(logging, level_name.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    # stdout carries the serialized metadata, so logs go to stderr.
    handler = logging.StreamHandler(sys.stderr)
    if sys.stderr.isatty():
        handler.setFormatter(ColorFormatter(LOG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)

    logging.getLogger("PIL").setLevel(logging.WARNING)
    logging.getLogger("mutagen").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Blob metadata extraction")
    parser.add_argument("--config", type=Path, help="Path to matedump.yaml")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)
    extract_parser = subparsers.add_parser(
        "extract", help="Extract metadata from a file and print it as JSON or CSV"
    )
    extract_parser.add_argument("path", type=Path, help="File to inspect")
    extract_parser.add_argument(
        "--type",
        dest="declared_type",
        default=None,
        help="Declared MIME type (default: guessed from the file name)",
    )
    extract_parser.add_argument(
        "--format",
        choices=("json", "csv"),
        default=None,
        help="Output format (default: output.format from the config)",
    )
    extract_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Write to this file, or to metadata.<format> inside this directory",
    )
    extract_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Give up after this many seconds",
    )
    subparsers.add_parser("doctor", help="Report which capabilities are available")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    logger = logging.getLogger(__name__)

    try:
        config_path = find_config(args.config)
        settings = Settings.load(config_path) if config_path else Settings()
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Invalid configuration: {exc}")

    match args.command:
        case "extract":
            try:
                outcome = cmd_extract.run(
                    settings,
                    args.path,
                    declared_type=args.declared_type,
                    fmt=args.format,
                    out=args.out,
                    timeout=args.timeout,
                )
            except FileNotFoundError:
                logger.error("No such file: %s", args.path)
                raise SystemExit(1)
            except asyncio.TimeoutError:
                logger.error("Timed out extracting metadata from %s", args.path)
                raise SystemExit(1)
            except MatedumpError as exc:
                logger.error("%s", exc)
                raise SystemExit(1)
            except OSError as exc:
                # After TimeoutError, which is an OSError on 3.11+.
                logger.error("Could not read %s or write its metadata: %s", args.path, exc)
                raise SystemExit(1)
            if outcome.destination is None:
                print(outcome.text)
        case "doctor":
            report = cmd_doctor.run(settings, config_path=config_path)
            for line in report.checks:
                print(line)
            if not report.ok:
                raise SystemExit(1)
        case _:
            parser.error("Unknown command")


if __name__ == "__main__":  # pragma: no cover
    main()
