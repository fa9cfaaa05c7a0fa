"""
Code table header

    [symbol count: 1 byte]
    repeated count times: [symbol: 1 byte][code length: tally][code: raw bits]
    [padding: zeros then a 1]

A count byte of 0 stands for 256 symbols; a real stream always has at
least two. The padding is sized over header + body together, so the body
ends exactly on a byte boundary and the decoder can read to the end.
"""
import logging
from typing import Dict

from bitstream import BitStream
from errors import CorruptStreamError, OutOfRangeError
import huffman as huff

log = logging.getLogger(__name__)

MAX_SYMBOLS = 256
MIN_ENTRY_BITS = 8 + 2 + 1 # symbol byte, shortest tally (00), one code bit


def write_header(codes: Dict[int, str], body_bits: int) -> BitStream:
    """codes must already be in the order they should be written (ascending symbol)."""
    if not 0 < len(codes) <= MAX_SYMBOLS:
        raise ValueError(f"header needs 1..{MAX_SYMBOLS} symbols, got {len(codes)}")
    header = BitStream()
    header.append_byte(len(codes) % MAX_SYMBOLS)
    for symbol, code in codes.items():
        header.append_byte(symbol)
        header.append_number(len(code))
        header.append_bits(code)
    header.append_padding(header.size() + body_bits)
    return header


def read_header(stream: BitStream) -> Dict[str, int]:
    """Consumes header and padding from stream, returns code -> symbol."""
    try:
        count = stream.read_byte() or MAX_SYMBOLS
        if stream.size() < count * MIN_ENTRY_BITS + 1:
            raise CorruptStreamError(f"header declares {count} symbols but only {stream.size()} bits remain")

        code_table: Dict[str, int] = {}
        seen = set()
        for _ in range(count):
            symbol = stream.read_byte()
            length = stream.read_number()
            if length == 0:
                raise CorruptStreamError(f"symbol {symbol} has an empty code")
            if length > stream.size():
                raise CorruptStreamError(f"code of symbol {symbol} needs {length} bits, {stream.size()} remain")
            code = stream.read_bits(length)
            if code in code_table or symbol in seen:
                raise CorruptStreamError(f"duplicate header entry for symbol {symbol} / code {code}")
            code_table[code] = symbol
            seen.add(symbol)

        if not huff.is_prefix_free(code_table):
            raise CorruptStreamError("header codes are not prefix-free")

        if '1' not in stream.peek_bits(min(8, stream.size())):
            raise CorruptStreamError("missing padding terminator after header")
        stream.read_padding()
    except OutOfRangeError as exc:
        raise CorruptStreamError(f"stream ends inside the header: {exc}") from exc

    log.debug("read header with %d symbols", len(code_table))
    return code_table
