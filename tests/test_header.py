import struct

import pytest

from airstruct.exceptions import TruncatedHeader
from airstruct.header import SIGNATURE_SIZE, Signature


def test_signature():
    data = b''.join(struct.pack('<I', _) for _ in range(1, 7))

    signature = Signature.unpack(data)

    assert signature == Signature(magic=1, version=2, offset=3, size=4, cpu_type=5, magic2=6)
    assert SIGNATURE_SIZE == 24


def test_signature_little_endian():
    data = bytes(range(24))

    signature = Signature.unpack(data)

    assert signature.magic == 0x03020100
    assert signature.magic2 == 0x17161514


def test_signature_no_validation():
    """Whatever value is fine, and what follows is ignored."""
    data = b'\xff' * 24 + b'\x00' * 8

    signature = Signature.unpack(data)

    assert signature.cpu_type == 0xffffffff


@pytest.mark.parametrize('size', [0, 4, 23])
def test_signature_truncated(size):
    with pytest.raises(TruncatedHeader):
        Signature.unpack(b'\x00' * size)
