import pytest

from bitstream import BitStream
from errors import OutOfRangeError


def test_assign_and_append_mix():
    bs = BitStream()
    bs.assign_bits("0000")
    bs.append_byte(200)       # 11001000
    bs.append_byte(ord('a'))  # 01100001
    bs.append_bits("00")
    assert bs.read_all_bits() == "0000110010000110000100"
    # 22 bits, the last byte is zero filled
    assert bs.read_all_bytes() == bytes([0b00001100, 0b10000110, 0b00010000])


def test_assign_bytes_is_msb_first_and_resets_cursor():
    bs = BitStream("1")
    bs.read_bit()
    bs.assign_bytes(b"\x80\x01")
    assert bs.size() == 16
    assert bs.read_all_bits() == "1000000000000001"
    assert bs.read_byte() == 0x80
    assert bs.read_byte() == 0x01


def test_read_all_views_ignore_cursor():
    bs = BitStream("10101010")
    assert bs.read_bits(3) == "101"
    assert bs.size() == 5
    assert len(bs) == 5
    assert bs.read_all_bits() == "10101010"
    assert bs.read_all_bytes() == b"\xaa"


def test_empty_stream_packs_to_nothing():
    assert BitStream().read_all_bytes() == b""


def test_read_past_end_raises():
    bs = BitStream("101")
    with pytest.raises(OutOfRangeError):
        bs.read_bits(4)
    # failed read doesn't move the cursor
    assert bs.read_bits(3) == "101"
    with pytest.raises(IndexError):
        bs.read_bit()


def test_peek_does_not_advance():
    bs = BitStream("0011")
    assert bs.peek_bits(3) == "001"
    assert bs.read_bits(4) == "0011"


@pytest.mark.parametrize("value,bits", [
    (0, "00"),
    (1, "010"),
    (2, "0110"),
    (4, "011110"),
    (5, "100"),
    (12, "110110"),
])
def test_tally_known_forms(value, bits):
    bs = BitStream()
    bs.append_number(value)
    assert bs.read_all_bits() == bits


@pytest.mark.parametrize("value", [0, 1, 2, 5, 25, 26])
def test_tally_roundtrip_and_length(value):
    a, b = divmod(value, 5)
    bs = BitStream()
    bs.append_number(value)
    assert bs.size() == a + b + 2
    assert bs.read_number() == value
    assert bs.size() == 0


def test_tally_values_are_self_delimiting():
    bs = BitStream()
    for v in (3, 0, 17, 5):
        bs.append_number(v)
    assert [bs.read_number() for _ in range(4)] == [3, 0, 17, 5]


@pytest.mark.parametrize("prior", range(0, 24))
def test_padding_aligns_and_terminates(prior):
    bs = BitStream()
    bs.append_padding(prior)
    pad = bs.read_all_bits()
    assert 1 <= len(pad) <= 8
    assert pad.endswith("1") and pad.count("1") == 1
    assert (prior + len(pad)) % 8 == 0


def test_aligned_length_still_gets_a_full_byte():
    bs = BitStream()
    bs.append_padding(16)
    assert bs.read_all_bits() == "00000001"


def test_read_padding_stops_after_terminator():
    bs = BitStream("0001" + "0110")
    bs.read_padding()
    assert bs.read_bits(4) == "0110"


def test_invalid_input_rejected():
    bs = BitStream()
    with pytest.raises(ValueError):
        bs.append_bits("012")
    with pytest.raises(ValueError):
        bs.append_byte(256)
    with pytest.raises(ValueError):
        bs.append_number(-1)
    assert bs.size() == 0


def test_clear():
    bs = BitStream("1111")
    bs.read_bit()
    bs.clear()
    assert bs.size() == 0
    assert bs.read_all_bits() == ""
