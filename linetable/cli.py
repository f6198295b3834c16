"""Command-line interface for linetable.

Reads delimiter-separated text from a file or stdin and prints one lookup
result, the raw text of a labeled line, a dump of all parsed lines, or the
last line number.
"""

from __future__ import annotations

import argparse
import sys

import structlog

from linetable.errors import LineTableError
from linetable.loader import load_file, load_text
from linetable.lookup import ValueKind, lookup
from linetable.main import configure_logging
from linetable.settings import get_settings
from linetable.table import LineTable

LOGGER = structlog.get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="linetable", description="Look up values in delimiter-separated labeled lines."
    )
    p.add_argument("path", nargs="?", default="-", help="Input file path or '-' for stdin")
    p.add_argument("--delimiter", "-d", help="Field delimiter (single character)")
    p.add_argument("--encoding", help="Input file encoding")
    action = p.add_mutually_exclusive_group(required=True)
    action.add_argument("--get", metavar="LABEL", help="Print the value stored after LABEL")
    action.add_argument("--line", metavar="LABEL", help="Print the raw line starting with LABEL")
    action.add_argument("--dump", action="store_true", help="Print every parsed line")
    action.add_argument("--last", action="store_true", help="Print the last line number")
    p.add_argument(
        "--type",
        dest="kind",
        choices=[kind.value for kind in ValueKind if kind is not ValueKind.LINE],
        default=ValueKind.STRING.value,
        help="Value type for --get (default: string)",
    )
    return p


def _load(args: argparse.Namespace) -> LineTable:
    settings = get_settings()
    if args.path == "-":
        return load_text(sys.stdin.read(), delimiter=args.delimiter, settings=settings, source="<stdin>")
    return load_file(args.path, delimiter=args.delimiter, encoding=args.encoding, settings=settings)


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(get_settings().log_level)

    try:
        table = _load(args)
        if args.get is not None:
            sys.stdout.write(_format_value(lookup(table, args.get, args.kind)) + "\n")
        elif args.line is not None:
            line = lookup(table, args.line, ValueKind.LINE)
            if line is None:
                sys.stderr.write(f"error: no line starting with {args.line!r}\n")
                return 1
            sys.stdout.write(line.raw + "\n")
        elif args.dump:
            for line in table:
                sys.stdout.write(f"{line.index}\t{'|'.join(line.fields)}\n")
        else:
            sys.stdout.write(f"{table.last_line_number()}\n")
    except LineTableError as ex:
        LOGGER.debug("cli.failed", error=type(ex).__name__)
        sys.stderr.write(f"error: {ex}\n")
        return 2
    # Unreadable input: missing file, directory, bad bytes or unknown encoding name.
    except (OSError, UnicodeDecodeError, LookupError) as ex:
        sys.stderr.write(f"error: {ex}\n")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
