"""Main CLI entry point for datalink."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .. import __version__
from ..codec.decoder import decode_fields
from ..codec.encoder import encode_fields
from ..exceptions import DataLinkError
from .analyze import analyze_file


def _parse_ints(text: str) -> list[int]:
    try:
        return [int(part) for part in text.split(",") if part.strip()]
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected comma-separated integers, got {text!r}") from e


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the datalink command."""
    parser = argparse.ArgumentParser(
        prog="datalink",
        description="datalink: Text-Safe Bit-Packing Codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  datalink encode --widths 2,4,12 2 7 455      Encode three fields
  datalink decode --widths 2,4,12 PAYLOAD      Decode them again
  datalink decode --widths 12 --payload=-c     Decode a payload starting with "-"
  datalink analyze records.py                  Analyze record schemas
  datalink --version                           Show version
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"datalink {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    encode_parser = subparsers.add_parser("encode", help="Encode integers to a payload")
    encode_parser.add_argument(
        "--widths", required=True, type=_parse_ints, help="Comma-separated bit widths"
    )
    encode_parser.add_argument("values", nargs="*", type=int, help="Values to encode")

    decode_parser = subparsers.add_parser("decode", help="Decode a payload to integers")
    decode_parser.add_argument(
        "--widths", required=True, type=_parse_ints, help="Comma-separated bit widths"
    )
    decode_parser.add_argument("payload", nargs="?", help="Payload to decode")
    decode_parser.add_argument(
        "--payload",
        dest="payload_option",
        metavar="PAYLOAD",
        help="Payload to decode, for payloads starting with '-' (use --payload=PAYLOAD)",
    )

    analyze_parser = subparsers.add_parser(
        "analyze", help="Analyze record schemas and show field sizes"
    )
    analyze_parser.add_argument("file", metavar="FILE", help="Python file with BaseRecord classes")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the datalink CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "encode":
        try:
            print(encode_fields(args.values, args.widths))
            return 0
        except DataLinkError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    if args.command == "decode":
        if (args.payload is None) == (args.payload_option is None):
            parser.error("decode takes exactly one payload, positional or --payload")
        payload = args.payload if args.payload_option is None else args.payload_option

        try:
            values = decode_fields(payload, args.widths)
        except DataLinkError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(",".join(str(value) for value in values))
        return 0

    if args.command == "analyze":
        file_path = Path(args.file)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            analyze_file(file_path)
            return 0
        except Exception as e:
            print(f"Error analyzing file: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
