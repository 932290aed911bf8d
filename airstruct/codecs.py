'''
Integer and character encodings used by the fields of the bitstream.

## VBR

Variable bit-rate integers are stored as a sequence of fixed width chunks:
the most significant bit of each chunk tells if another chunk follows, the
remaining bits are the payload, the least significant chunk comes first.

For example 17 with chunks 4 bits wide is `1001 0010`, packed in a single
byte as 0x29.

The encoding is not canonical: nothing forbids a value to be padded with
empty chunks, so we decode chunk by chunk without checking.

## Char6

Six bits per character, covering letters, digits, '.' and '_'.
'''
from .exceptions import InvalidChar6, VbrOverflow


MIN_VBR_WIDTH = 2
MAX_VBR_WIDTH = 32
MAX_VALUE_WIDTH = 64

CHAR6_WIDTH = 6


def read_vbr(stream, width: int) -> int:
    if not MIN_VBR_WIDTH <= width <= MAX_VBR_WIDTH:
        raise VbrOverflow(f'VBR chunk width {width} out of range', position=stream.pos)

    position = stream.pos
    flag = 1 << (width - 1)
    mask = flag - 1

    value = 0
    shift = 0
    while True:
        chunk = stream.read_bits(width)
        value |= (chunk & mask) << shift

        if not chunk & flag:
            break

        shift += width - 1
        # 64 may not be divisible by width - 1
        if shift >= MAX_VALUE_WIDTH:
            raise VbrOverflow(f'VBR{width} doesn\'t terminate within {MAX_VALUE_WIDTH} bits', position=position)

    if value >> MAX_VALUE_WIDTH:
        raise VbrOverflow(f'VBR{width} value doesn\'t fit in {MAX_VALUE_WIDTH} bits', position=position)

    return value


def decode_char6(value: int) -> int:
    '''Map a 6-bit code to its ASCII character.

    NOTE: the codes from 26 to 51 map to the lowercase letters again
    and not to the uppercase ones.'''
    if 0 <= value <= 25:
        return ord('a') + value
    if 26 <= value <= 51:
        return ord('a') + (value - 26)
    if 52 <= value <= 61:
        return ord('0') + (value - 52)
    if value == 62:
        return ord('.')
    if value == 63:
        return ord('_')

    raise InvalidChar6(f'{value} is not a valid 6-bit character')


def read_char6(stream) -> int:
    position = stream.pos
    try:
        return decode_char6(stream.read_bits(CHAR6_WIDTH))
    except InvalidChar6 as e:
        e.position = position
        raise
