'''
# Apple Intermediate Representation

Compiled Metal shaders are stored as AIR: a small signature followed by a
bitstream in the LLVM bitcode container style.

    air = AIRFile('/path/to/shader.air')
    for block in air.blocks():
        print(block.type, block.records())
'''
import logging

from .core import Block, Record, decode
from .enum import Compliant


class AIRFile(object):
    '''Decoded AIR blob; it's possible to pass the path of the file or
    directly the raw bytes.'''

    def __init__(self, obj, compliant=Compliant.NONE, **kwargs):
        self.logger = logging.getLogger(__name__)

        init_method_name = 'init_%s' % obj.__class__.__name__
        init_method = getattr(self, init_method_name, None)
        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of source for an AIR file' % obj.__class__.__name__)

        self.data = init_method(obj)
        self.signature, self.items = decode(self.data, compliant=compliant, **kwargs)

    def __repr__(self):
        return '<%s(magic=0x%08x, items=%d)>' % (self.__class__.__name__, self.signature.magic, len(self.items))

    def init_str(self, path):
        '''We think this is a path'''
        self.logger.debug('opening path \'%s\'' % path)
        with open(path, 'rb') as f:
            return f.read()

    def init_bytes(self, data):
        return data

    def init_bytearray(self, data):
        return bytes(data)

    def init_memoryview(self, data):
        return data.tobytes()

    def blocks(self):
        '''All the blocks, depth first.'''
        for item in self.items:
            if isinstance(item, Block):
                yield from item.walk()

    def records(self):
        '''All the records, depth first.'''
        for item in self.items:
            if isinstance(item, Record):
                yield item
            elif isinstance(item, Block):
                for block in item.walk():
                    yield from block.records()
