"""
Command line wrapper around HuffmanCodec

How to run:
  python cli.py -e plain.txt packed.huf
  python cli.py -d packed.huf plain.txt
  python cli.py -v -e plain.txt packed.huf    (prints size statistics)

The exit status is always 0; problems are reported as text.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from codec import HuffmanCodec, Status, describe_status


class UsageError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    # report bad usage without argparse's exit status 2
    def error(self, message):
        self.print_usage(sys.stderr)
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    ap = _ArgumentParser(description="Greedy Huffman compression of whole files")
    mode = ap.add_mutually_exclusive_group(required=True)
    mode.add_argument("-e", dest="mode", action="store_const", const="encode", help="Encode (compress) input into output")
    mode.add_argument("-d", dest="mode", action="store_const", const="decode", help="Decode (decompress) input into output")
    ap.add_argument("input", help="Input file")
    ap.add_argument("output", help="Output file")
    ap.add_argument("-v", "--verbose", action="count", default=0, help="-v for size statistics, -vv to also dump the tree")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    try:
        args = ap.parse_args(argv)
    except UsageError as exc:
        print(f"{ap.prog}: {exc}", file=sys.stderr)
        return 0

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    codec = HuffmanCodec()
    if args.mode == "encode":
        status = codec.encode_file(args.input, args.output)
    else:
        status = codec.decode_file(args.input, args.output)

    if status != Status.OK:
        print(describe_status(status))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
