"""
# Airstruct: AIR container decoder.

An AIR blob is made of a fixed signature of six 32-bit words followed by a
bitstream: a sequence of fields packed at arbitrary bit offsets, starting from
the least significant bit of each byte.

The bitstream is organized in

 1. blocks: nested scopes, each one with its own width for the abbreviation IDs
 2. abbreviations: templates describing how the operands of a record are encoded
 3. records: an identifier followed by the values of its operands

Decoding only goes one way:

    signature, items = decode(data)

where items are the top-level blocks, abbreviations and records. Every error
derives from DecodeError and aborts the whole decoding.
"""
from .core import (
    Abbreviation,
    AbbreviationTable,
    Block,
    EndBlock,
    Parser,
    Record,
    decode,
)
from .enum import BlockType, Compliant
from .exceptions import DecodeError
from .header import Signature
