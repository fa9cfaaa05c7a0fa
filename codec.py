import logging
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import BinaryIO, Union

from bitstream import BitStream
from errors import CorruptStreamError
from header import read_header, write_header
import huffman as huff

log = logging.getLogger(__name__)

PathLike = Union[str, Path]


class Status(IntEnum): # results of the file level API
    OK = 0
    INPUT_OPEN_ERROR = 1
    OUTPUT_OPEN_ERROR = 2
    EMPTY_INPUT = 3
    READ_ERROR = 4
    WRITE_ERROR = 5
    CORRUPT_INPUT = 6


STATUS_MESSAGES = {
    Status.OK: "OK.",
    Status.INPUT_OPEN_ERROR: "Error opening input file.",
    Status.OUTPUT_OPEN_ERROR: "Error opening output file.",
    Status.EMPTY_INPUT: "Empty input file.",
    Status.READ_ERROR: "Read error.",
    Status.WRITE_ERROR: "Write error.",
    Status.CORRUPT_INPUT: "Input is not a valid compressed stream.",
}


def describe_status(code: int) -> str:
    try:
        return STATUS_MESSAGES[Status(code)]
    except ValueError:
        return "Unknown error."


@dataclass
class CodecStats:
    operation: str = ""
    plain_bytes: int = 0
    unique_symbols: int = 0  # includes the filler for single-symbol inputs
    header_bits: int = 0     # header + padding
    body_bits: int = 0
    packed_bytes: int = 0

    @property
    def compression_ratio(self) -> float:
        return self.packed_bytes / max(1, self.plain_bytes)


class HuffmanCodec:
    """
    Whole-buffer greedy Huffman encoder/decoder.

    Every call builds its own frequency table, tree and code tables; the
    only thing kept between calls is `stats` for the last operation. Use
    one instance per thread.
    """

    def __init__(self):
        self.stats = CodecStats()

    def encode(self, data: bytes) -> bytes:
        self.stats = CodecStats(operation="encode", plain_bytes=len(data))
        if not data:
            return b""

        ft = huff.add_filler_symbol(huff.freq_table(data))
        root = huff.build_huffman_tree(ft)
        if log.isEnabledFor(logging.DEBUG):
            log.debug("huffman tree:\n%s", huff.describe_tree(root))
        codes = huff.build_code_table(root, ft)

        # body first: the header padding depends on its length
        body = huff.huffman_encode(data, codes)
        stream = write_header(codes, len(body))
        self.stats.header_bits = stream.size()
        stream.append_bits(body)
        packed = stream.read_all_bytes()

        self.stats.unique_symbols = len(codes)
        self.stats.body_bits = len(body)
        self.stats.packed_bytes = len(packed)
        self._log_stats()
        return packed

    def decode(self, data: bytes) -> bytes:
        self.stats = CodecStats(operation="decode", packed_bytes=len(data))
        if not data:
            return b""

        stream = BitStream()
        stream.assign_bytes(data)
        code_table = read_header(stream)
        self.stats.unique_symbols = len(code_table)
        self.stats.header_bits = len(data) * 8 - stream.size()
        self.stats.body_bits = stream.size()

        decoded = huff.huffman_decode(stream.read_bits(stream.size()), code_table)
        self.stats.plain_bytes = len(decoded)
        self._log_stats()
        return decoded

    def _log_stats(self) -> None:
        s = self.stats
        log.info("%s: plain %d bytes, %d symbols, header %d bits, body %d bits, packed %d bytes",
                 s.operation, s.plain_bytes, s.unique_symbols, s.header_bits, s.body_bits, s.packed_bytes)

    # File adapters

    def encode_file(self, input_path: PathLike, output_path: PathLike) -> Status:
        return self._transform_file(self.encode, input_path, output_path)

    def decode_file(self, input_path: PathLike, output_path: PathLike) -> Status:
        return self._transform_file(self.decode, input_path, output_path)

    def _transform_file(self, transform, input_path: PathLike, output_path: PathLike) -> Status:
        try:
            f = open(input_path, "rb")
        except OSError as exc:
            log.warning("cannot open input %s: %s", input_path, exc)
            return Status.INPUT_OPEN_ERROR
        try:
            with f:
                data = f.read()
        except OSError as exc:
            log.warning("cannot read %s: %s", input_path, exc)
            return Status.READ_ERROR
        if not data:
            return Status.EMPTY_INPUT

        try:
            result = transform(data)
        except CorruptStreamError as exc:
            log.warning("%s: %s", input_path, exc)
            return Status.CORRUPT_INPUT

        try:
            f = open(output_path, "wb")
        except OSError as exc:
            log.warning("cannot open output %s: %s", output_path, exc)
            return Status.OUTPUT_OPEN_ERROR
        try:
            with f:
                f.write(result)
        except OSError as exc: # includes errors surfacing on the final flush/close
            log.warning("cannot write %s: %s", output_path, exc)
            return Status.WRITE_ERROR
        return Status.OK

    # Stream adapters, for already open binary file objects

    def encode_stream(self, fin: BinaryIO, fout: BinaryIO) -> Status:
        return self._transform_stream(self.encode, fin, fout)

    def decode_stream(self, fin: BinaryIO, fout: BinaryIO) -> Status:
        return self._transform_stream(self.decode, fin, fout)

    def _transform_stream(self, transform, fin: BinaryIO, fout: BinaryIO) -> Status:
        try:
            data = fin.read()
        except OSError as exc:
            log.warning("cannot read input stream: %s", exc)
            return Status.READ_ERROR
        if not data:
            return Status.EMPTY_INPUT

        try:
            result = transform(data)
        except CorruptStreamError as exc:
            log.warning("input stream: %s", exc)
            return Status.CORRUPT_INPUT

        try:
            fout.write(result)
            fout.flush()
        except OSError as exc:
            log.warning("cannot write output stream: %s", exc)
            return Status.WRITE_ERROR
        return Status.OK


def encode(data: bytes) -> bytes:
    return HuffmanCodec().encode(data)


def decode(data: bytes) -> bytes:
    return HuffmanCodec().decode(data)
