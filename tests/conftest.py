import struct

import pytest


class BitWriter(object):
    '''Pack fields least significant bit first, the same way they are read back.'''

    def __init__(self):
        self.value = 0
        self.pos = 0

    def fixed(self, value, width):
        assert 0 <= value < (1 << width), f'{value} doesn\'t fit in {width} bits'
        self.value |= value << self.pos
        self.pos += width
        return self

    def vbr(self, value, width):
        flag = 1 << (width - 1)
        while value >= flag:
            self.fixed((value & (flag - 1)) | flag, width)
            value >>= width - 1
        return self.fixed(value, width)

    def char6(self, code):
        return self.fixed(code, 6)

    def align(self):
        self.pos += -self.pos % 32
        return self

    def enter_subblock(self, width, block_type, new_width, length):
        return self.fixed(1, width).vbr(block_type, 8).vbr(new_width, 4).align().fixed(length, 32)

    def end_block(self, width):
        return self.fixed(0, width).align()

    def define_abbrev(self, width, n_operands):
        return self.fixed(2, width).vbr(n_operands, 5)

    def literal_operand(self, value):
        return self.fixed(1, 1).vbr(value, 8)

    def encoded_operand(self, selector, data=None):
        self.fixed(0, 1).fixed(selector, 3)
        if data is not None:
            self.vbr(data, 5)
        return self

    def tobytes(self):
        return self.value.to_bytes((self.pos + 7) // 8, 'little')


@pytest.fixture
def writer():
    return BitWriter()


@pytest.fixture
def make_air():
    '''Prepend a signature to a bitstream body.'''
    def _make_air(body, signature=(0x0b17c0de, 0, 0x14, 0, 0x01000007, 0xdec04342)):
        return struct.pack('<6I', *signature) + body

    return _make_air
