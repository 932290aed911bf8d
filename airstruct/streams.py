import logging

from bitstring import BitArray, ConstBitStream

from .exceptions import InvalidBitWidth, UnexpectedEndOfStream


logger = logging.getLogger(__name__)

MAX_READ_WIDTH = 64

# bitstring reads the most significant bit of each byte first, the bitstream
# is packed starting from the least significant one
_REVERSED = bytes(int('{:08b}'.format(_)[::-1], 2) for _ in range(256))


class BitStream(object):
    '''Sequential reader of a bitstream packed least-significant-bit first.

    Bit 0 of the stream is the least significant bit of the first byte,
    the following bits continue into the low bits of each next byte, so that
    reading the bits of a field one after the other and assembling them
    starting from the least significant gives back the value.

    All the reads are atomic: if the requested width is not available
    UnexpectedEndOfStream is raised and the position doesn't move.
    '''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as raw bytes'''
        self._type = type(obj)
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of object to read bits from' % self._type.__name__)

        init_method()

        self._bits = ConstBitStream(bytes=self.obj.translate(_REVERSED))
        logger.debug('bitstream of %d bytes' % len(self.obj))

    def __len__(self):
        return self._bits.len

    def __repr__(self):
        return f'<{self.__class__.__name__}(pos={self.pos}, len={len(self)})>'

    def init_bytes(self):
        pass

    def init_bytearray(self):
        self.obj = bytes(self.obj)

    def init_memoryview(self):
        self.obj = self.obj.tobytes()

    @property
    def pos(self) -> int:
        return self._bits.pos

    def position_in_bits(self) -> int:
        return self._bits.pos

    def remaining_bits(self) -> int:
        return self._bits.len - self._bits.pos

    def at_end(self) -> bool:
        return self.remaining_bits() <= 0

    def _ensure(self, n):
        if n > self.remaining_bits():
            raise UnexpectedEndOfStream(
                f'need {n} bits but only {self.remaining_bits()} are left',
                position=self.pos,
            )

    def read_bits(self, n: int) -> int:
        '''Read a n-bit wide unsigned integer.

        A zero width field is allowed and it's always zero.'''
        if n == 0:
            return 0

        if not 0 < n <= MAX_READ_WIDTH:
            raise InvalidBitWidth(f'cannot read {n} bits at once', position=self.pos)

        self._ensure(n)

        chunk = BitArray(self._bits.read(n))
        chunk.reverse()

        return chunk.uint

    def read_bytes(self, n: int) -> bytes:
        self._ensure(n * 8)

        return self._bits.read(n * 8).tobytes().translate(_REVERSED)

    def skip(self, n: int) -> None:
        if n < 0:
            raise ValueError('cannot skip backward')

        self._ensure(n)
        self._bits.pos += n

    def align_to_32(self) -> None:
        '''Move to the next multiple of 32 bits.

        The end of the buffer counts as aligned: a stream is not required
        to carry the trailing padding of its last word.'''
        remainder = self.pos % 32
        if not remainder:
            return

        self._bits.pos = min(self.pos + 32 - remainder, len(self))
