"""
CLI (Command Line Interface).

    repy convert [--input-file REPY] [--output-file out.json] [--fetch]
    repy fetch --out REPY [--mirror REPY.txt] [--url URL]
    repy summary [--input-file REPY | --json catalog.json]

Parse warnings go to stderr through the logging module; JSON and tables go
to stdout.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from repy.config import Settings, get_settings
from repy.errors import RepyError
from repy.export import dumps, load_json, write_json
from repy.fetch import fetch_repy, save_repy
from repy.logger import StdLogger
from repy.model import Catalog
from repy.parse import parse, read_file


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_catalog(args: argparse.Namespace, settings: Settings) -> Catalog:
    """
    Get a catalog from whatever source the arguments name.
    """
    logger = StdLogger()
    if getattr(args, "json", None):
        return load_json(args.json)
    if getattr(args, "fetch", False):
        data = fetch_repy(settings.repfile_url, name=settings.member_name, timeout=settings.http_timeout)
        return parse(data, logger=logger)
    if args.input_file:
        return read_file(args.input_file, logger=logger)
    return parse(sys.stdin.buffer, logger=logger)


def _cmd_convert(args: argparse.Namespace, settings: Settings) -> int:
    """
    Parse REPY and write the catalog as JSON.
    """
    catalog = _load_catalog(args, settings)

    if args.output_file:
        write_json(catalog, args.output_file)
        print(f"Wrote {len(catalog)} faculties to: {args.output_file}", file=sys.stderr)
    else:
        sys.stdout.write(dumps(catalog) + "\n")
    return 0


def _cmd_fetch(args: argparse.Namespace, settings: Settings) -> int:
    """
    Download REPFILE.zip and store the REPY file (and optionally a mirror).
    """
    url = args.url or settings.repfile_url
    data = fetch_repy(url, name=settings.member_name, timeout=settings.http_timeout)
    save_repy(data, args.out, mirror_path=args.mirror)
    print(f"Saved {len(data)} bytes to: {args.out}")
    return 0


def _cmd_summary(args: argparse.Namespace, settings: Settings) -> int:
    """
    Print one table row per faculty.
    """
    catalog = _load_catalog(args, settings)

    table = Table(title="REPY catalog", box=box.SIMPLE)
    table.add_column("Faculty")
    table.add_column("Semester")
    table.add_column("Courses", justify="right")
    table.add_column("Groups", justify="right")

    for faculty in catalog:
        groups = sum(len(c.groups) for c in faculty.courses)
        table.add_row(faculty.name, faculty.semester, str(len(faculty.courses)), str(groups))

    Console().print(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="repy", description="REPY timetable parser")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (default: REPY_LOG_LEVEL or WARNING)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_convert = sub.add_parser("convert", help="Convert REPY to JSON")
    p_convert.add_argument("--input-file", "-i", type=str, default=None, help="REPY file (default: stdin)")
    p_convert.add_argument("--output-file", "-o", type=str, default=None, help="JSON file (default: stdout)")
    p_convert.add_argument("--fetch", action="store_true", help="Download REPY instead of reading a file")

    p_fetch = sub.add_parser("fetch", help="Download and extract REPY")
    p_fetch.add_argument("--out", type=str, required=True, help="Where to store the raw REPY file")
    p_fetch.add_argument("--mirror", type=str, default=None, help="Also store an ISO-8859-8 copy here")
    p_fetch.add_argument("--url", type=str, default=None, help="REPFILE.zip URL")

    p_summary = sub.add_parser("summary", help="Show faculties and course counts")
    p_summary.add_argument("--input-file", "-i", type=str, default=None, help="REPY file (default: stdin)")
    p_summary.add_argument("--json", type=str, default=None, help="Read a converted JSON catalog instead")

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    _setup_logging(args.log_level.upper() if args.log_level else settings.log_level)

    handlers = {
        "convert": _cmd_convert,
        "fetch": _cmd_fetch,
        "summary": _cmd_summary,
    }

    try:
        raise SystemExit(handlers[args.command](args, settings))
    except RepyError as err:
        print(f"Failed to read REPY: {err}", file=sys.stderr)
        raise SystemExit(1)
