"""Command-line interface for pass-entry.

Reads one already-decrypted ``pass`` entry from stdin (or a file) and
decodes it, so it can sit at the end of a pipe:

    pass show email/personal | pass-entry get email/personal --attr login

Provides subcommands:
  get  - Write a single attribute of the entry to stdout
  show - Write the whole decoded entry as JSON

Exit codes:
    0 - Success
    1 - Attribute not present on the entry
    2 - Entry could not be decoded
    3 - Invalid arguments
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Optional

from pass_entry.entry import DecodeError, Entry, decode

ATTRIBUTES = ("secret", "password", "login", "url", "notes", "name")


def _resolve_name(args) -> str:
    """Resolve the entry name from the CLI argument or PASS_ENTRY_NAME."""
    if args.name is not None:
        return args.name
    name = os.environ.get("PASS_ENTRY_NAME")
    if name is None:
        print(
            "error: no entry name given and PASS_ENTRY_NAME is not set",
            file=sys.stderr,
        )
        sys.exit(3)
    return name


def _read_content(args) -> bytes:
    """Read raw entry bytes from --file, or stdin when no file is given."""
    if args.file is None:
        return sys.stdin.buffer.read()

    path = Path(args.file).expanduser()
    try:
        return path.read_bytes()
    except OSError as exc:
        print(f"error: cannot read {path}: {exc.strerror}", file=sys.stderr)
        sys.exit(3)


def _load_entry(args) -> Entry:
    """Decode the entry named on the command line, exiting with code 2 on failure."""
    name = _resolve_name(args)
    content = _read_content(args)
    try:
        return decode(name, content)
    except DecodeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(2)


def _get_attribute(entry: Entry, attr: str) -> Optional[str]:
    """Return the requested attribute of a decoded Entry."""
    return getattr(entry, attr.lower())


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------


def cmd_get(args) -> int:
    """Handle the 'get' subcommand."""
    entry = _load_entry(args)

    value = _get_attribute(entry, args.attr)
    if value is None:
        print(f"error: attribute '{args.attr}' not found on entry", file=sys.stderr)
        return 1

    sys.stdout.write(value)
    return 0


def cmd_show(args) -> int:
    """Handle the 'show' subcommand."""
    entry = _load_entry(args)
    sys.stdout.write(json.dumps(entry.to_dict(), indent=args.indent) + "\n")
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _add_entry_args(parser: argparse.ArgumentParser) -> None:
    """Add common entry name/input arguments to a subparser."""
    parser.add_argument(
        "name",
        nargs="?",
        default=None,
        help="Entry name, e.g. email/personal (default: $PASS_ENTRY_NAME)",
    )
    parser.add_argument(
        "--file",
        default=None,
        help="Read the decrypted entry from this file instead of stdin",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="pass-entry",
        description="Decode pass password store entries into structured fields",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__import__('pass_entry').__version__}",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # -- get --
    p_get = sub.add_parser("get", help="Write one attribute of the entry to stdout")
    _add_entry_args(p_get)
    p_get.add_argument(
        "--attr",
        default="secret",
        type=str.lower,
        choices=ATTRIBUTES,
        help="Attribute to retrieve (default: secret)",
    )
    p_get.set_defaults(func=cmd_get)

    # -- show --
    p_show = sub.add_parser("show", help="Write the decoded entry as JSON")
    _add_entry_args(p_show)
    p_show.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Indent the JSON output by this many spaces",
    )
    p_show.set_defaults(func=cmd_show)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)
