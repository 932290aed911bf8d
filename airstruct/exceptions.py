class DecodeError(Exception):
    '''Base class to extend in order to throw exception in airstruct.

    It takes as optional arguments the chain of the blocks that were open
    when the error happened (outermost first) and the position in bits,
    relative to the start of the bitstream, of the failing step.
    '''

    def __init__(self, message='', chain=None, position=None):
        self.chain = chain if chain is not None else []
        self.position = position
        super().__init__(message)

    def __str__(self):
        msg = super().__str__()
        if self.position is not None:
            msg = f'{msg} (at bit {self.position})'
        if self.chain:
            msg = f'{msg} [in {" > ".join(self.chain)}]'

        return msg


class TruncatedHeader(DecodeError):
    pass


class UnexpectedEndOfStream(DecodeError):
    pass


class InvalidBitWidth(DecodeError):
    '''A fixed-width read or a block abbreviation width outside the
    supported range.'''
    pass


class VbrOverflow(DecodeError):
    pass


class InvalidChar6(DecodeError):
    pass


class UnknownOperandEncoding(DecodeError):
    pass


class UnknownAbbreviation(DecodeError):
    pass


class NotAScalarOperand(DecodeError):
    pass


class UnsupportedRecordForm(DecodeError):
    pass


class UnknownBlockType(DecodeError):
    pass


class NestingTooDeep(DecodeError):
    pass


class BlockLengthMismatch(DecodeError):
    '''Raised only when Compliant.BLOCK_LENGTH is requested.'''
    pass
