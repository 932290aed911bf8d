#!/usr/bin/env python3
import sys
import os
import logging

from airstruct.air import AIRFile
from airstruct.core import Abbreviation, Block, Record
from airstruct.exceptions import DecodeError

if 'DEBUG' in os.environ:
    logging.basicConfig()
    logger = logging.getLogger('airstruct')
    logger.setLevel(logging.DEBUG)


def usage(progname):
    print('usage: %s <air file>' % progname)
    sys.exit(1)


def dump_signature(signature):
    print(f'''AIR Signature:
  Magic:                             0x{signature.magic:08x}
  Version:                           {signature.version}
  Offset:                            {signature.offset} (bytes into file)
  Size:                              {signature.size} (bytes)
  CPU type:                          0x{signature.cpu_type:08x}
  Magic2:                            0x{signature.magic2:08x}''')


def dump_items(items, indent=1):
    pad = '  ' * indent
    for item in items:
        if isinstance(item, Block):
            print(f'{pad}<{item.type.name} width={item.abbrev_width} length={item.length}>')
            dump_items(item.items, indent=indent + 1)
            print(f'{pad}</{item.type.name}>')
        elif isinstance(item, Abbreviation):
            print(f'{pad}abbrev {", ".join(repr(_) for _ in item.operands)}')
        elif isinstance(item, Record):
            print(f'{pad}record #{item.id} {list(item.operands)} (abbrev {item.abbreviation})')


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    path = sys.argv[1]

    try:
        air = AIRFile(path)
    except DecodeError as e:
        print(f'{path}: {e.__class__.__name__}: {e}')
        sys.exit(2)

    dump_signature(air.signature)

    print('Items:')
    dump_items(air.items)
