'''
# Sound Label Info

The `soundlabelinfo.sli` table binds the hash40 of a tone label to the
nus3bank containing it and to the id of the tone inside the bank.

Everything is little-endian and there is no padding:

  .-----------------------------------.
  | magic "SLI\x00"                   |  4 bytes
  | version                           |  u32
  | number of entries                 |  u32
  | entry 0: name_id/bank_id/tone_id  |  u64 + u32 + u32
  | entry 1                           |
    ...
  | entry N - 1                       |
  '-----------------------------------'

Anything after the last declared entry is ignored. The number of entries is
never stored by the table: it is recomputed from the actual entries when packing.
'''
import logging
from enum import Enum, auto

from ..core import Chunk
from .. import fields
from ..properties import Dependency


logger = logging.getLogger(__name__)

SLI_MAGIC = b'SLI\x00'


class SLIFormat(Enum):
    BINARY  = auto()
    TEXT    = auto()
    UNKNOWN = auto()


def sniff(data: bytes) -> SLIFormat:
    '''Peek at the data to decide how to interpret it without committing to a parsing.'''
    if not data:
        return SLIFormat.UNKNOWN

    if data.startswith(SLI_MAGIC):
        return SLIFormat.BINARY

    if b'\x00' in data:
        return SLIFormat.UNKNOWN

    try:
        data.decode('utf-8')
    except UnicodeDecodeError:
        return SLIFormat.UNKNOWN

    return SLIFormat.TEXT


class SLIEntry(Chunk):
    '''An entry representing a single tone'''
    name_id = fields.Hash40Field()
    bank_id = fields.StructField('I')
    tone_id = fields.StructField('I')

    @classmethod
    def new(cls, name_id, bank_id, tone_id):
        entry = cls()
        entry.name_id = name_id
        entry.bank_id = bank_id
        entry.tone_id = tone_id

        return entry


class SLIFile(Chunk):
    magic   = fields.StringField(4, default=SLI_MAGIC, is_magic=True)
    version = fields.StructField('I', default=1)
    count   = fields.StructField('I')
    entries = fields.ArrayField(SLIEntry, n=Dependency('.count'))

    @classmethod
    def open(cls, path, **kwargs):
        return cls(path, **kwargs)

    @classmethod
    def from_bytes(cls, data, **kwargs):
        return cls(bytes(data), **kwargs)

    @classmethod
    def new(cls, version, entries):
        '''Build a table from SLIEntry instances or (name_id, bank_id, tone_id) tuples.'''
        sli = cls()
        sli.version = version
        sli.entries = [_ if isinstance(_, SLIEntry) else SLIEntry.new(*_) for _ in entries]
        sli.relayout()

        return sli

    def write(self, fileobj):
        fileobj.write(self.pack())

    def save(self, path):
        logger.debug("saving %d entries to '%s'", len(self.entries), path)
        with open(path, 'wb') as f:
            self.write(f)
