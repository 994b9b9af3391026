"""
.partner file tool — inspect, normalize and generate partner import files.

Usage:
    # Show every field the parser found, with errors and warnings
    python scripts/partner_file.py inspect data/atlas.partner

    # Rewrite a hand-written file in canonical form
    python scripts/partner_file.py normalize data/atlas.partner -o out/atlas

    # Write the example template
    python scripts/partner_file.py example -o exemple-partenaire
"""

import argparse
import os
import sys
from typing import Optional

# Allow imports from the repo root when running as a script
_root_dir = os.path.join(os.path.dirname(__file__), "..")
sys.path.insert(0, _root_dir)

from dotenv import load_dotenv

from config import configure_logging
from exceptions import AppError
from models import ParseResult
from parsers import parse_partner_file
from services import (
    apply_parsed_fields,
    build_example_partner_file,
    serialize_applied_result,
)
from utils.partner_file_io import read_partner_file, write_partner_file


def print_report(path: str, result: ParseResult) -> None:
    """Print a parse result as a readable table."""
    print(f"\n{path}")
    print("─" * 60)

    meta = result.metadata
    for label, value in (
        ("Version", meta.version),
        ("Generated", meta.generated_at),
        ("Source", meta.source),
    ):
        if value:
            print(f"  {label + ':':<11} {value}")

    if result.fields:
        width = max(len(f.raw_key) for f in result.fields)
        print()
        for f in result.fields:
            flag = " " if f.recognized else "?"
            print(f"  {flag} {f.raw_key:<{width}}  {f.section:<7}  {f.canonical_key} = {f.value}")

    for warning in result.warnings:
        print(f"  WARNING  {warning}")
    for error in result.errors:
        print(f"  ERROR    {error}")

    status = "OK" if result.ok else "INVALID"
    print(f"\n  {status}: {len(result.fields)} fields, "
          f"{len(result.errors)} errors, {len(result.warnings)} warnings")


def cmd_inspect(args: argparse.Namespace) -> int:
    result = parse_partner_file(read_partner_file(args.file))
    print_report(args.file, result)
    return 0 if result.ok else 1


def cmd_normalize(args: argparse.Namespace) -> int:
    result = parse_partner_file(read_partner_file(args.file))
    if not result.ok:
        print_report(args.file, result)
        return 1

    applied = apply_parsed_fields(result.fields, result.raw_keys())
    content = serialize_applied_result(applied, source=result.metadata.source)
    return _output(content, args.output)


def cmd_example(args: argparse.Namespace) -> int:
    return _output(build_example_partner_file(), args.output)


def _output(content: str, output: Optional[str]) -> int:
    if output:
        written = write_partner_file(output, content)
        print(f"Wrote {written}")
    else:
        sys.stdout.write(content)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=".partner file tool")
    sub = parser.add_subparsers(dest="command", required=True)

    p_inspect = sub.add_parser("inspect", help="Parse a file and show its fields")
    p_inspect.add_argument("file", help="Path to a .partner file")
    p_inspect.set_defaults(func=cmd_inspect)

    p_normalize = sub.add_parser("normalize", help="Rewrite a file in canonical form")
    p_normalize.add_argument("file", help="Path to a .partner file")
    p_normalize.add_argument("-o", "--output", help="Output path (stdout if omitted)")
    p_normalize.set_defaults(func=cmd_normalize)

    p_example = sub.add_parser("example", help="Write the example template")
    p_example.add_argument("-o", "--output", help="Output path (stdout if omitted)")
    p_example.set_defaults(func=cmd_example)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    load_dotenv(os.path.join(_root_dir, ".env"))
    configure_logging()

    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except AppError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
