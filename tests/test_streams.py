import pytest

from airstruct.exceptions import InvalidBitWidth, UnexpectedEndOfStream
from airstruct.streams import BitStream


def test_read_bits_lsb_first():
    """Check that the fields are taken starting from the least significant bit
    of each byte and continue in the following one."""
    stream = BitStream(b'\xb5\x01')

    assert stream.read_bits(4) == 0x5
    assert stream.read_bits(4) == 0xb
    assert stream.read_bits(8) == 0x01
    assert stream.position_in_bits() == 16
    assert stream.at_end()


def test_read_bits_across_bytes():
    stream = BitStream(b'\xff\x00\x34\x12')

    assert stream.read_bits(3) == 0b111
    assert stream.read_bits(10) == 0b11111
    assert stream.read_bits(3) == 0

    assert stream.read_bits(16) == 0x1234


def test_read_64_bits():
    data = bytes(range(1, 9))
    stream = BitStream(data)

    assert stream.read_bits(64) == int.from_bytes(data, 'little')


def test_read_zero_bits():
    stream = BitStream(b'\xff')

    assert stream.read_bits(0) == 0
    assert stream.pos == 0


@pytest.mark.parametrize('width', [-1, 65, 128])
def test_read_invalid_width(width):
    stream = BitStream(b'\xff' * 16)

    with pytest.raises(InvalidBitWidth):
        stream.read_bits(width)


def test_read_is_atomic():
    stream = BitStream(b'\x01')

    assert stream.read_bits(4) == 1

    with pytest.raises(UnexpectedEndOfStream) as excinfo:
        stream.read_bits(8)

    assert excinfo.value.position == 4
    assert stream.pos == 4
    assert stream.read_bits(4) == 0


def test_skip():
    stream = BitStream(b'\x00\x80')

    stream.skip(15)
    assert stream.position_in_bits() == 15
    assert stream.read_bits(1) == 1

    with pytest.raises(UnexpectedEndOfStream):
        stream.skip(1)


def test_align_to_32():
    stream = BitStream(b'\x00' * 4 + b'\x2a\x00\x00\x00')

    stream.align_to_32()
    assert stream.pos == 0

    stream.read_bits(3)
    stream.align_to_32()
    assert stream.pos == 32

    stream.align_to_32()
    assert stream.pos == 32
    assert stream.read_bits(32) == 42


def test_align_to_32_stops_at_the_end():
    stream = BitStream(b'\x00')

    stream.read_bits(2)
    stream.align_to_32()

    assert stream.pos == 8
    assert stream.at_end()


def test_read_bytes():
    stream = BitStream(b'\x00\x00\x00\x00abc')

    stream.skip(32)
    assert stream.read_bytes(3) == b'abc'

    with pytest.raises(UnexpectedEndOfStream):
        stream.read_bytes(1)


@pytest.mark.parametrize('obj', [
    b'\x2a',
    bytearray(b'\x2a'),
    memoryview(b'\x2a'),
])
def test_sources(obj):
    stream = BitStream(obj)

    assert len(stream) == 8
    assert stream.read_bits(8) == 0x2a


def test_wrong_source():
    with pytest.raises(ValueError):
        BitStream([0x2a])
