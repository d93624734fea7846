"""
cidkit command line.

Convert between sha2-256 digests and CIDv1 strings, hash files, and
resolve multihash values read from the filesystem registry.

Usage::

    python -m cidkit hex-to-cid E8E2C917BD0E93EF803AD03CADD32142BF3B8119F46B7BA567E9CF203B68DA9E
    python -m cidkit cid-to-hex bafkreihi4lerppiospxyaowqhsw5gikcx45ycgpunn52kz7jz4qdw2g2ty --lower
    python -m cidkit content ./history.json
    python -m cidkit resolve '{"hash": "0x...", "hashFunction": 18, "size": 32}'

Options:
    -v, --verbose   Enable debug logging
    --no-color      Disable colored logging output

Environment:
    CIDKIT_HEX_CASE  Default case for cid-to-hex output ('upper' or 'lower')
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from cidkit import config
from cidkit.multiformats import CodecError, Multihash, cid_to_hex, content_cid, hex_to_cid

logger = logging.getLogger(__name__)

_HANDLER_NAME = "cidkit"


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"
        return f"{levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Send log records to stderr, replacing any handler installed by an earlier call."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)

    if no_color:
        handler.setFormatter(logging.Formatter("%(levelname)-8s %(name)s: %(message)s"))
    else:
        handler.setFormatter(ColoredFormatter())

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)
    root.setLevel(level)
    root.addHandler(handler)


def _hex_to_cid(args: argparse.Namespace) -> str:
    return hex_to_cid(args.digest)


def _cid_to_hex(args: argparse.Namespace) -> str:
    return cid_to_hex(args.cid, uppercase=args.case == "upper")


def _content(args: argparse.Namespace) -> str:
    data = args.path.read_bytes()
    logger.debug("Hashing %d bytes from %s", len(data), args.path)
    return content_cid(data)


def _resolve(args: argparse.Namespace) -> str:
    multihash = Multihash.model_validate_json(args.multihash)
    return multihash.to_cid()


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="cidkit",
        description="Content identifier conversions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    hex_cmd = commands.add_parser("hex-to-cid", help="Convert a sha2-256 hex digest to a CIDv1")
    hex_cmd.add_argument("digest", help="64 hex characters, optional 0x prefix")
    hex_cmd.set_defaults(handler=_hex_to_cid)

    cid_cmd = commands.add_parser("cid-to-hex", help="Extract the sha2-256 digest of a CIDv1")
    cid_cmd.add_argument("cid", help="CIDv1 string starting with 'b'")
    case = cid_cmd.add_mutually_exclusive_group()
    case.add_argument("--upper", dest="case", action="store_const", const="upper")
    case.add_argument("--lower", dest="case", action="store_const", const="lower")
    cid_cmd.set_defaults(handler=_cid_to_hex, case=config.CIDKIT_HEX_CASE)

    content_cmd = commands.add_parser("content", help="Compute the CIDv1 of a file")
    content_cmd.add_argument("path", type=Path, help="File to hash")
    content_cmd.set_defaults(handler=_content)

    resolve_cmd = commands.add_parser("resolve", help="Resolve a registry multihash to a CID")
    resolve_cmd.add_argument(
        "multihash", help='JSON object: {"hash": ..., "hashFunction": ..., "size": ...}'
    )
    resolve_cmd.set_defaults(handler=_resolve)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit status."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, args.no_color)

    try:
        result = args.handler(args)
    except CodecError as e:
        logger.error("%s failed (%s): %s", args.command, e.kind.name, e)
        return 1
    except ValidationError as e:
        logger.error("Invalid multihash: %s", e)
        return 1
    except OSError as e:
        logger.error("Cannot read input: %s", e)
        return 1

    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
