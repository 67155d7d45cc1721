'''
# Hash40

Identifiers inside the tables are not strings but the "hash40" of them: a
40 bit value made of the CRC-32 of the label in the lower 32 bits and the
length of the label (in bytes) starting from bit 32.

The CRC is the standard one defined by ISO 3309 (the same used by zlib and
PNG), so the value can be reproduced everywhere bit for bit:

    >>> hex(hash40('test'))
    '0x4d87f7e0c'
'''
import re
from zlib import crc32

from .exceptions import InvalidLiteralException


HASH40_PREFIX = '0x'
HASH40_MAX = (1 << 64) - 1

_HEX_DIGITS = re.compile(r'[0-9a-fA-F]+')


def hash40(label) -> int:
    '''Callers are expected to trim the label themselves.'''
    if isinstance(label, str):
        data = label.encode('utf-8')
    elif isinstance(label, (bytes, bytearray)):
        data = bytes(label)
    else:
        raise TypeError(f'a label must be str or bytes, not {type(label).__name__}')

    return crc32(data) | (len(data) << 32)


def is_hash40_literal(text: str) -> bool:
    return text.startswith(HASH40_PREFIX)


def parse_hash40_literal(text: str) -> int:
    digits = text[len(HASH40_PREFIX):] if is_hash40_literal(text) else text

    if not _HEX_DIGITS.fullmatch(digits):
        raise InvalidLiteralException(text)

    value = int(digits, 16)
    if value > HASH40_MAX:
        raise InvalidLiteralException(text)

    return value


def format_hash40(value: int) -> str:
    return f'{value:#x}'
