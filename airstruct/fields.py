"""
The encodings an abbreviation can use for its operands.

An abbreviation is a template: each operand says how the corresponding value
of a record is stored in the stream, so that a record defined via an
abbreviation doesn't need to describe itself. The set of encodings is closed:

 - Literal(value): constant, doesn't consume any bit
 - Fixed(width): unsigned integer with a fixed number of bits
 - Variable(width): VBR encoded unsigned integer with chunks of "width" bits
 - Array(element): a VBR8 count followed by that many "element" values
 - Char6: a 6-bit character
 - Blob: a VBR6 byte count, padding to 32 bits, the bytes, padding again

Only Literal, Fixed, Variable and Char6 are scalars, i.e. can be used
as the identifier of a record.
"""
import logging

from .codecs import read_vbr, read_char6
from .enum import OperandKind
from .exceptions import NotAScalarOperand, UnexpectedEndOfStream, UnknownOperandEncoding


logger = logging.getLogger(__name__)

LITERAL_WIDTH = 8
ENCODING_DATA_WIDTH = 5
ARRAY_LENGTH_WIDTH = 8
BLOB_LENGTH_WIDTH = 6


class Operand(object):
    """Base class to subclass from"""
    scalar = True

    def _key(self):
        return ()

    def __eq__(self, other):
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self):
        return hash((type(self), self._key()))

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(repr(_) for _ in self._key()))

    def unpack(self, stream):
        raise NotImplementedError(f"method {self.__class__.__name__}.unpack() not implemented")


class Literal(Operand):

    def __init__(self, value: int):
        self.value = value

    def _key(self):
        return (self.value,)

    def unpack(self, stream):
        return self.value


class Fixed(Operand):

    def __init__(self, width: int):
        self.width = width

    def _key(self):
        return (self.width,)

    def unpack(self, stream):
        return stream.read_bits(self.width)


class Variable(Operand):

    def __init__(self, width: int):
        self.width = width

    def _key(self):
        return (self.width,)

    def unpack(self, stream):
        return read_vbr(stream, self.width)


class Char6(Operand):

    def unpack(self, stream):
        return read_char6(stream)


class Array(Operand):
    scalar = False

    def __init__(self, element: Operand):
        self.element = element

    def _key(self):
        return (self.element,)

    def unpack(self, stream):
        position = stream.pos
        count = read_vbr(stream, ARRAY_LENGTH_WIDTH)
        # a plausible count is never larger than the bits left in the stream
        if count > stream.remaining_bits():
            raise UnexpectedEndOfStream(
                f'array of {count} elements with only {stream.remaining_bits()} bits left',
                position=position,
            )

        logger.debug(f'array of {count} {self.element!r}')

        return tuple(read_scalar_operand(stream, self.element) for _ in range(count))


class Blob(Operand):
    scalar = False

    def unpack(self, stream):
        length = read_vbr(stream, BLOB_LENGTH_WIDTH)
        stream.align_to_32()
        data = stream.read_bytes(length)
        stream.align_to_32()

        return data


def read_scalar_operand(stream, operand: Operand) -> int:
    if not operand.scalar:
        raise NotAScalarOperand(
            f'{operand!r} is not a scalar operand, use read_operand() instead',
            position=stream.pos,
        )

    return operand.unpack(stream)


def read_operand(stream, operand: Operand):
    return operand.unpack(stream)


def unpack_operand(stream, element=False) -> Operand:
    '''Read the definition of a single operand of DEFINE_ABBREV.

    An array carries the encoding of its elements right after itself; with
    "element" set only scalar encodings are accepted.'''
    position = stream.pos

    is_literal = stream.read_bits(1)
    if is_literal:
        return Literal(read_vbr(stream, LITERAL_WIDTH))

    selector = stream.read_bits(3)
    try:
        kind = OperandKind(selector)
    except ValueError:
        raise UnknownOperandEncoding(f'operand encoding {selector} doesn\'t exist', position=position) from None

    if element and kind in (OperandKind.ARRAY, OperandKind.BLOB):
        raise UnknownOperandEncoding(f'{kind.name} cannot be the element of an array', position=position)

    if kind == OperandKind.FIXED:
        return Fixed(read_vbr(stream, ENCODING_DATA_WIDTH))
    if kind == OperandKind.VBR:
        return Variable(read_vbr(stream, ENCODING_DATA_WIDTH))
    if kind == OperandKind.CHAR6:
        return Char6()
    if kind == OperandKind.BLOB:
        return Blob()

    return Array(unpack_operand(stream, element=True))
