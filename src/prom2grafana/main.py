"""
prom2grafana command line entry point.

Usage:
    prom2grafana convert <filename> <output-folder> [--dry-run]
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from prom2grafana import __version__
from prom2grafana.config.settings import get_settings
from prom2grafana.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prom2grafana",
        description="Convert Prometheus rules into Grafana alert resources",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: PROM2GRAFANA_LOG_LEVEL or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command")

    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert a Prometheus rules file into Grizzly resources",
    )
    convert_parser.add_argument("filename", help="Path to the Prometheus rules YAML file")
    convert_parser.add_argument("output_folder", help="Directory to write resource files into")
    convert_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print resources to stdout instead of writing files",
    )

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(args.log_level or settings.log_level, json_logs=settings.log_json)

    if args.command == "convert":
        from prom2grafana.cli.convert import convert_command

        sys.exit(convert_command(args.filename, args.output_folder, dry_run=args.dry_run))

    parser.print_help()
    sys.exit(1)


if __name__ == "__main__":
    main()
