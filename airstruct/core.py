"""
Core module for the decoding of the bitstream

The body of an AIR blob is a sequence of entries, each one introduced by an
abbreviation ID whose width depends on the block it lives in (2 bits at the
top level):

 0. END_BLOCK: closes the current block, the stream is padded to 32 bits
 1. ENTER_SUBBLOCK: block type (VBR8), abbreviation ID width of the new block
    (VBR4), padding to 32 bits and the length of the block in 32-bit words
 2. DEFINE_ABBREV: a new entry for the abbreviation table
 3. UNABBREV_RECORD: a record describing itself, not supported
 4. and following: a record encoded via the abbreviation with index ID - 4

The abbreviation table is one for the whole decoding: an abbreviation defined
inside a block remains usable after the block is closed, wherever we are.
"""
import logging
from typing import List, Optional, Tuple, Union

from .codecs import read_vbr
from .enum import AbbreviationID, BlockType, Compliant
from .exceptions import (
    BlockLengthMismatch,
    DecodeError,
    InvalidBitWidth,
    NestingTooDeep,
    NotAScalarOperand,
    UnknownAbbreviation,
    UnknownBlockType,
    UnsupportedRecordForm,
)
from .fields import Operand, read_operand, read_scalar_operand, unpack_operand
from .header import SIGNATURE_SIZE, Signature
from .streams import BitStream


logger = logging.getLogger(__name__)

TOP_LEVEL_ABBREV_WIDTH = 2
MAX_ABBREV_WIDTH = 32
DEFAULT_MAX_DEPTH = 64

BLOCK_TYPE_WIDTH = 8
ABBREV_WIDTH_WIDTH = 4
BLOCK_LENGTH_WIDTH = 32
OPERAND_COUNT_WIDTH = 5


class Abbreviation(object):
    '''Ordered sequence of operand encodings.'''

    def __init__(self, operands):
        self.operands: Tuple[Operand, ...] = tuple(operands)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(repr(_) for _ in self.operands))

    def __eq__(self, other):
        return isinstance(other, Abbreviation) and self.operands == other.operands

    def __hash__(self):
        return hash(self.operands)

    def __len__(self):
        return len(self.operands)

    def __iter__(self):
        return iter(self.operands)

    def __getitem__(self, item):
        return self.operands[item]


class AbbreviationTable(object):
    '''Abbreviations defined so far, in order of definition; it only grows.'''

    def __init__(self):
        self._abbreviations: List[Abbreviation] = []

    def __repr__(self):
        return f'<{self.__class__.__name__}({self._abbreviations!r})>'

    def __len__(self):
        return len(self._abbreviations)

    def __iter__(self):
        return iter(self._abbreviations)

    def append(self, abbreviation: Abbreviation) -> int:
        '''Add the abbreviation and return its index.'''
        self._abbreviations.append(abbreviation)

        return len(self._abbreviations) - 1

    def lookup(self, index: int, position=None) -> Abbreviation:
        if not 0 <= index < len(self._abbreviations):
            raise UnknownAbbreviation(
                f'abbreviation with index {index} not defined ({len(self._abbreviations)} available)',
                position=position,
            )

        return self._abbreviations[index]

    __getitem__ = lookup


class Block(object):
    '''A nested scope of the bitstream.

    "length" is the length declared in the stream, in 32-bit words, and
    "offset" the position in bits of the first entry of the block.'''

    def __init__(self, type: BlockType, abbrev_width: int, length: int, offset=None, items=None):
        self.type = type
        self.abbrev_width = abbrev_width
        self.length = length
        self.offset = offset
        self.items: List["Item"] = items if items is not None else []

    def __repr__(self):
        return '<%s(%s, width=%d, length=%d, items=%r)>' % (
            self.__class__.__name__,
            self.type.name,
            self.abbrev_width,
            self.length,
            self.items,
        )

    def __eq__(self, other):
        if not isinstance(other, Block):
            return NotImplemented

        return (self.type, self.abbrev_width, self.length, self.items) == \
            (other.type, other.abbrev_width, other.length, other.items)

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)

    def walk(self):
        '''Yield this block and all the blocks nested inside, depth first.'''
        pending = [self]
        while pending:
            block = pending.pop()
            yield block
            pending.extend(reversed([_ for _ in block.items if isinstance(_, Block)]))

    def records(self):
        return [_ for _ in self.items if isinstance(_, Record)]


class Record(object):
    '''A record identifier with the values of its operands.

    "abbreviation" is the index in the abbreviation table used to decode
    it, None is reserved to unabbreviated records.'''

    def __init__(self, id: int, operands=(), abbreviation: Optional[int] = None):
        self.id = id
        self.operands = tuple(operands)
        self.abbreviation = abbreviation

    def __repr__(self):
        return f'<{self.__class__.__name__}(id={self.id}, operands={self.operands!r}, abbreviation={self.abbreviation})>'

    def __eq__(self, other):
        if not isinstance(other, Record):
            return NotImplemented

        return (self.id, self.operands, self.abbreviation) == (other.id, other.operands, other.abbreviation)

    @property
    def values(self):
        return (self.id,) + self.operands


class EndBlock(object):
    '''Marker returned when a block is closed, it's never stored.'''

    def __repr__(self):
        return f'<{self.__class__.__name__}>'


END_BLOCK = EndBlock()

Item = Union[Block, Abbreviation, Record, EndBlock]


class Parser(object):
    '''Drive the decoding of the entries of a bitstream.

    Nested blocks are tracked via an explicit stack of the blocks still open,
    so that the nesting level doesn't depend on the recursion limit; more
    than "max_depth" blocks open at the same time is an error.'''

    def __init__(self, stream: BitStream, abbreviations=None, compliant=Compliant.NONE, max_depth=DEFAULT_MAX_DEPTH):
        self.logger = logging.getLogger(__name__)
        self.stream = stream
        self.abbreviations = abbreviations if abbreviations is not None else AbbreviationTable()
        self.compliant = compliant
        self.max_depth = max_depth
        self._stack: List[Block] = []

    def define_abbreviation(self) -> Abbreviation:
        count = read_vbr(self.stream, OPERAND_COUNT_WIDTH)
        abbreviation = Abbreviation(unpack_operand(self.stream) for _ in range(count))

        index = self.abbreviations.append(abbreviation)
        self.logger.debug('defined abbreviation #%d %r' % (index, abbreviation))

        return abbreviation

    def decode_abbreviated_record(self, index: int) -> Record:
        position = self.stream.pos
        abbreviation = self.abbreviations.lookup(index, position=position)

        if not abbreviation.operands:
            raise NotAScalarOperand(f'abbreviation #{index} has no operand for the record id', position=position)

        record_id = read_scalar_operand(self.stream, abbreviation[0])
        operands = [read_operand(self.stream, _) for _ in abbreviation[1:]]

        return Record(record_id, operands, abbreviation=index)

    def enter_subblock(self) -> Block:
        '''Read the header of a block; its entries are up to the caller.'''
        position = self.stream.pos

        code = read_vbr(self.stream, BLOCK_TYPE_WIDTH)
        try:
            block_type = BlockType(code)
        except ValueError:
            raise UnknownBlockType(f'block type {code} not implemented', position=position) from None

        width = read_vbr(self.stream, ABBREV_WIDTH_WIDTH)
        if width > MAX_ABBREV_WIDTH:
            raise InvalidBitWidth(f'abbreviation ID width {width} too large', position=position)

        self.stream.align_to_32()
        length = self.stream.read_bits(BLOCK_LENGTH_WIDTH)

        return Block(block_type, width, length, offset=self.stream.pos)

    def end_block(self) -> EndBlock:
        self.stream.align_to_32()

        return END_BLOCK

    def read_entry(self, width: int) -> Item:
        '''Decode a single entry: for ENTER_SUBBLOCK only the header of the block is read.'''
        position = self.stream.pos
        abbrev_id = self.stream.read_bits(width)

        if abbrev_id == AbbreviationID.END_BLOCK:
            return self.end_block()
        if abbrev_id == AbbreviationID.ENTER_SUBBLOCK:
            return self.enter_subblock()
        if abbrev_id == AbbreviationID.DEFINE_ABBREV:
            return self.define_abbreviation()
        if abbrev_id == AbbreviationID.UNABBREV_RECORD:
            raise UnsupportedRecordForm('unabbreviated records are not supported', position=position)

        return self.decode_abbreviated_record(abbrev_id - AbbreviationID.APPLICATION)

    def _push(self, block: Block):
        if len(self._stack) >= self.max_depth:
            raise NestingTooDeep(f'more than {self.max_depth} nested blocks', position=block.offset)

        self._stack.append(block)
        self.logger.debug('entering block %s at bit %d (width=%d, length=%d)' % (
            block.type.name, block.offset, block.abbrev_width, block.length))

    def _pop(self):
        block = self._stack[-1]

        if self.compliant & Compliant.BLOCK_LENGTH:
            words = (self.stream.pos - block.offset) // 32
            if words != block.length:
                raise BlockLengthMismatch(
                    f'block declares {block.length} words but {words} were used',
                    position=self.stream.pos,
                )

        self._stack.pop()
        self.logger.debug('leaving block %s with %d items' % (block.type.name, len(block.items)))

    def _parse_block(self, block: Block):
        self._push(block)

        while self._stack:
            current = self._stack[-1]
            item = self.read_entry(current.abbrev_width)

            if item is END_BLOCK:
                self._pop()
                continue

            current.items.append(item)

            if isinstance(item, Block):
                self._push(item)

    def parse_item(self, width: int = TOP_LEVEL_ABBREV_WIDTH) -> Item:
        '''Decode the next entry; a block is returned with all its content.'''
        try:
            item = self.read_entry(width)
            if isinstance(item, Block):
                self._parse_block(item)
        except DecodeError as e:
            e.chain = [_.type.name for _ in self._stack]
            self._stack.clear()
            raise

        return item

    def parse(self) -> List[Item]:
        '''Decode entries at the top level until the stream is exhausted.'''
        items = []
        while not self.stream.at_end():
            item = self.parse_item()

            if item is END_BLOCK:
                self.logger.warning('END_BLOCK outside of any block at bit %d' % self.stream.pos)
                continue

            items.append(item)

        return items


def decode(data, compliant=Compliant.NONE, max_depth=DEFAULT_MAX_DEPTH) -> Tuple[Signature, List[Item]]:
    signature = Signature.unpack(data)
    logger.debug(f'signature {signature!r}')

    stream = BitStream(data[SIGNATURE_SIZE:])
    items = Parser(stream, compliant=compliant, max_depth=max_depth).parse()

    return signature, items
