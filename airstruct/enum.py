from enum import Enum, Flag, IntEnum


class Compliant(Flag):
    '''It indicates which degree of compliantness the data must reflect the format'''
    NONE         = 0
    BLOCK_LENGTH = 1 << 0


class BlockType(IntEnum):
    '''Block identifiers we know how to represent.'''
    IDENTIFICATION = 13


class AbbreviationID(IntEnum):
    '''Abbreviation IDs with a fixed meaning in every block; anything
    from APPLICATION on refers to an entry of the abbreviation table.'''
    END_BLOCK       = 0
    ENTER_SUBBLOCK  = 1
    DEFINE_ABBREV   = 2
    UNABBREV_RECORD = 3
    APPLICATION     = 4


class OperandKind(Enum):
    '''Selector following a cleared literal flag in DEFINE_ABBREV.'''
    FIXED = 1
    VBR   = 2
    ARRAY = 3
    CHAR6 = 4
    BLOB  = 5
