'''
# AIR signature

An AIR blob starts with six little-endian 32-bit words; the bitstream
follows immediately after them. We don't check any of the values: knowing
which magic or cpu type is acceptable is up to the caller.
'''
import struct
from typing import NamedTuple

from .exceptions import TruncatedHeader


class Signature(NamedTuple):
    magic: int
    version: int
    offset: int
    size: int
    cpu_type: int
    magic2: int

    FORMAT = '<6I'

    @classmethod
    def unpack(cls, data: bytes) -> 'Signature':
        size = struct.calcsize(cls.FORMAT)
        if len(data) < size:
            raise TruncatedHeader(f'the signature needs {size} bytes, {len(data)} given')

        return cls(*struct.unpack_from(cls.FORMAT, data))

    def __str__(self):
        return '\n'.join(f'{name}: 0x{getattr(self, name):08x}' for name in self._fields)


SIGNATURE_SIZE = struct.calcsize(Signature.FORMAT)
