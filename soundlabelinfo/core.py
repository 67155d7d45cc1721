"""
Core module for the abstraction of a file format

"""
from collections import OrderedDict
from typing import Tuple, List, Dict

from .fields import Field
from .enum import Compliant
from .meta import MetaChunk
from .streams import Stream
from .exceptions import SLIException
from .properties import (
    get_root_from_chunk,
    Dependency,
)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: its main attributes
    are offset and size that identify a Chunk.

    A Chunk can contain sub-chunks.

    If a source is passed to the constructor (a path, raw bytes or a binary
    file object) the chunk is unpacked from it, otherwise every field gets
    its default value.

    The chunk without a father enforces the magic fields unless
    another degree of compliance is requested.
    """

    def __init__(self, filepath=None, **kwargs):
        if 'compliant' not in kwargs:
            kwargs['compliant'] = Compliant.MAGIC if kwargs.get('father') is None else Compliant.INHERIT

        super().__init__(**kwargs)

        # now we have setup all the fields necessary and we can unpack if
        # some data is passed with the constructor
        if filepath is not None:
            with Stream(filepath) as stream:
                self.logger.debug("unpacking '%s' from %s", self.__class__.__name__, stream)
                self.unpack(stream)
        else:
            self.relayout()

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def get_dependencies(self) -> Dict[str, Dependency]:
        dep = super().get_dependencies()

        for field_name, field in self.get_fields():
            for key, value in field.get_dependencies().items():
                dep.update({f'{field_name}.{key}': value})

        return dep

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    def init(self):
        for _, field in self.get_fields():
            field.init()

    @property
    def root(self):
        '''Obtain the final father of this chunk'''
        return get_root_from_chunk(self)

    @property
    def isRoot(self):
        return self.root is self

    def _get_value(self):
        return OrderedDict([(name, field.value) for name, field in self.get_fields()])

    def _set_value(self, value):
        for name, field_value in value.items():
            setattr(self, name, field_value)

    def _get_size(self):
        '''the size parameter MUST not be set but MUST be derived from the subchunks'''
        size = 0
        for _, field in self.get_fields():
            size += field.size

        return size

    def _get_raw(self) -> bytes:
        value = b''
        for field_name, field_instance in self.get_fields():
            field_raw = field_instance.raw
            self.logger.debug("field '%s' raw=%r", field_name, field_raw)
            value += field_raw

        return value

    def _set_raw(self, raw: bytes) -> None:
        with Stream(raw) as stream:
            self.unpack(stream)

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def relayout(self, offset=0):
        '''This method triggers the chunk's children to reset the offsets
        and the derived values (like counts) in order to pack correctly.

        In practice it's like packing() but it's only interested in the sizes
        of the chunks.'''
        self.offset = offset

        size = 0
        for field_name, field_instance in self.get_fields():
            self.logger.debug('relayouting %s.%s', self.__class__.__name__, field_name)
            size += field_instance.relayout(offset=offset + size)

        return size

    def pack(self, stream=None, relayout=True):
        '''Encode the high-level representation into binary data.

        If we are the outermost chunk a relayout is triggered first, so that
        offsets and dependent fields are updated; the sub-chunks are packed
        without relayouting.
        '''
        if relayout:
            self.relayout(offset=self.offset or 0)

        stream = Stream(b'') if stream is None else stream

        for field_name, field_instance in self.get_fields():
            if field_instance.offset is None:
                raise AttributeError(f'offset for field named "{field_name}" {field_instance!r} is not defined!')

            self.logger.debug('packing %s.%s at offset %08x', self.__class__.__name__, field_name, field_instance.offset)
            field_instance.pack(stream=stream, relayout=False)

        stream.seek(self.offset)

        return stream.read_exact(self.size)

    def unpack(self, stream):
        '''This is one of the main APIs to take care of: its aim is to take a binary
        data and transform in the representation given by the class this method
        is implemented.

        The fields are read one after the other, in the order they are declared;
        an exception raised by a field gets its name prepended to the chain.
        '''
        self.offset = stream.tell()

        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s at offset %d', self.__class__.__name__, field_name, stream.tell())

            try:
                field.unpack(stream)
            except SLIException as e:
                e.chain.insert(0, field_name)
                raise
