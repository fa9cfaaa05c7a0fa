from errors import OutOfRangeError

TALLY_BASE = 5 # tally numbers are written as (v // 5) ones, 0, (v % 5) ones, 0


def _check_bits(bits: str) -> str:
    if bits.strip('01'):
        raise ValueError(f"bit string may only contain '0' and '1': {bits!r}")
    return bits


class BitStream:
    """
    Sequence of bits with a read cursor

    Bits are kept one per byte (ASCII '0'/'1') in a bytearray so appending a
    code and slicing a read are both cheap. The read_* methods move the
    cursor, read_all_* do not.
    """

    def __init__(self, bits: str = ""):
        self._bits = bytearray(_check_bits(bits).encode('ascii'))
        self._pos = 0 # index of the next bit to read

    # Loading

    def assign_bits(self, bits: str) -> None:
        self._bits = bytearray(_check_bits(bits).encode('ascii'))
        self._pos = 0

    def assign_bytes(self, data: bytes) -> None:
        self._bits = bytearray(''.join(f'{byte:08b}' for byte in data).encode('ascii'))
        self._pos = 0

    def clear(self) -> None:
        self._bits = bytearray()
        self._pos = 0

    # Appending

    def append_bits(self, bits: str) -> None:
        self._bits.extend(_check_bits(bits).encode('ascii'))

    def append_byte(self, value: int) -> None:
        if not 0 <= value <= 0xFF:
            raise ValueError(f"byte value out of range: {value}")
        self._bits.extend(f'{value:08b}'.encode('ascii'))

    def append_number(self, value: int) -> None:
        """
        Tally form: [value // 5 ones]0[value % 5 ones]0
        0 -> 00, 1 -> 010, 4 -> 011110, 5 -> 100, 12 -> 110110
        Values up to 25 stay within 8 bits (except a few like 4, 9, ...)
        """
        if value < 0:
            raise ValueError(f"tally numbers must be non-negative: {value}")
        a, b = divmod(value, TALLY_BASE)
        self._bits.extend(b'1' * a + b'0' + b'1' * b + b'0')

    def append_padding(self, total_size: int) -> None:
        """
        Pads so that total_size plus the padding is a multiple of 8.
        Padding is zeros then a single 1; an already aligned total still
        gets a full byte (7 zeros + the 1) since the terminator is required.
        """
        padding = 8 - (total_size % 8) # 1..8, 8 meaning already aligned
        self._bits.extend(b'0' * (padding - 1) + b'1')

    # Sequential reads

    def _take(self, n: int) -> bytearray:
        if n < 0:
            raise ValueError(f"cannot read a negative number of bits: {n}")
        if n > self.size():
            raise OutOfRangeError(f"requested {n} bits but only {self.size()} remain")
        chunk = self._bits[self._pos:self._pos + n]
        self._pos += n
        return chunk

    def read_bit(self) -> str:
        return chr(self._take(1)[0])

    def read_bits(self, n: int) -> str:
        return self._take(n).decode('ascii')

    def read_byte(self) -> int:
        return int(self._take(8).decode('ascii'), 2)

    def read_number(self) -> int:
        # inverse of append_number: count ones up to a zero, twice
        a = 0
        while self.read_bit() == '1':
            a += 1
        b = 0
        while self.read_bit() == '1':
            b += 1
        return a * TALLY_BASE + b

    def peek_bits(self, n: int) -> str:
        """Like read_bits but leaves the cursor where it was."""
        chunk = self._take(n)
        self._pos -= n
        return chunk.decode('ascii')

    def read_padding(self) -> None:
        # skips zeros up to and including the terminating 1 (8 bits at most)
        for _ in range(8):
            if self.read_bit() == '1':
                break

    # Whole-buffer views

    def read_all_bits(self) -> str:
        return self._bits.decode('ascii')

    def read_all_bytes(self) -> bytes:
        """Packs every bit (read or not) MSB first, zero filling the last byte."""
        n_bytes = (len(self._bits) + 7) // 8
        if n_bytes == 0:
            return b""
        bits = self._bits.decode('ascii').ljust(n_bytes * 8, '0')
        return int(bits, 2).to_bytes(n_bytes, 'big')

    def size(self) -> int:
        return len(self._bits) - self._pos

    def __len__(self) -> int:
        return self.size()

    def __repr__(self) -> str:
        return f"BitStream(size={self.size()}, pos={self._pos})"
