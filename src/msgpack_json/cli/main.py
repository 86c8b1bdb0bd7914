"""Main CLI entry point for msgpack-json."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import BinaryIO, List, Optional

from .. import __version__
from ..codec.msgpack_json import MsgpackJson
from ..codec.stream import MessagePacker, MessageUnpacker
from ..exceptions import MsgpackJsonError
from ..values import JsonValue, dumps, loads
from .analyze import analyze_file

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="msgpack-json",
        description="msgpack-json: MessagePack codec for JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  msgpack-json encode doc.json -o doc.msgpack       JSON to MessagePack
  msgpack-json encode events.jsonl --lines -o ev.mp One value per JSON line
  msgpack-json decode doc.msgpack --indent 2        MessagePack to JSON
  msgpack-json decode ev.mp --list                  Every value, one per line
  msgpack-json analyze doc.json                     Compare encoded sizes
        """,
    )
    parser.add_argument("--version", action="version", version=f"msgpack-json {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")

    sub = parser.add_subparsers(dest="command")

    encode_p = sub.add_parser("encode", help="Encode JSON to MessagePack")
    encode_p.add_argument("input", metavar="INPUT", help="JSON file ('-' for stdin)")
    encode_p.add_argument("-o", "--output", metavar="FILE", help="Output file (default: stdout)")
    encode_p.add_argument(
        "--lines", action="store_true", help="Read JSON Lines and write the values back-to-back"
    )

    decode_p = sub.add_parser("decode", help="Decode MessagePack to JSON")
    decode_p.add_argument("input", metavar="INPUT", help="MessagePack file ('-' for stdin)")
    decode_p.add_argument("-o", "--output", metavar="FILE", help="Output file (default: stdout)")
    decode_p.add_argument(
        "--list", action="store_true", help="Decode every concatenated value, one JSON line each"
    )
    decode_p.add_argument("--indent", type=int, metavar="N", help="Pretty-print with N spaces")
    decode_p.add_argument(
        "--cache-string",
        action="append",
        default=[],
        metavar="TEXT",
        help="Decode TEXT as a shared instance (repeatable)",
    )

    analyze_p = sub.add_parser("analyze", help="Compare MessagePack and JSON sizes of a document")
    analyze_p.add_argument("input", metavar="INPUT", help="JSON file")

    return parser


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _open_binary_input(path: str) -> BinaryIO:
    if path == "-":
        return sys.stdin.buffer
    return open(path, "rb")


def _cmd_encode(args: argparse.Namespace) -> None:
    text = _read_text(args.input)
    codec = MsgpackJson()

    values: List[JsonValue]
    if args.lines:
        values = [loads(line) for line in text.splitlines() if line.strip()]
    else:
        values = [loads(text)]
    logger.debug("Parsed %d JSON value(s) from %s", len(values), args.input)

    if args.output:
        with open(args.output, "wb") as sink:
            packer = MessagePacker(sink)
            codec.encode_list(packer, values)
            packer.flush()
    else:
        packer = MessagePacker(sys.stdout.buffer)
        codec.encode_list(packer, values)
        packer.flush()
    logger.debug("Encoded %d value(s)", len(values))


def _cmd_decode(args: argparse.Namespace) -> None:
    codec = MsgpackJson.builder().cached_strings(args.cache_string).build()

    source = _open_binary_input(args.input)
    try:
        unpacker = MessageUnpacker(source)
        if args.list:
            values = codec.decode_list(unpacker)
            lines = [dumps(value) for value in values]
        else:
            values = [codec.decode(unpacker)]
            if unpacker.has_next():
                logger.warning(
                    "Ignoring data after the first value (offset %d); use --list to decode all",
                    unpacker.bytes_read(),
                )
            lines = [dumps(values[0], indent=args.indent)]
    finally:
        if source is not sys.stdin.buffer:
            source.close()
    logger.debug("Decoded %d value(s) from %s", len(values), args.input)

    output = "\n".join(lines) + "\n"
    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the msgpack-json CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    # If no command specified, show help
    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.command == "encode":
            _cmd_encode(args)
        elif args.command == "decode":
            _cmd_decode(args)
        elif args.command == "analyze":
            file_path = Path(args.input)
            if not file_path.exists():
                print(f"Error: File not found: {file_path}", file=sys.stderr)
                return 1
            analyze_file(file_path)
        return 0
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        return 1
    except MsgpackJsonError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        # json.JSONDecodeError is a ValueError
        print(f"Error: Invalid JSON: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
