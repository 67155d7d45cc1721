"""
A Field is "fundamental" datatype from the format point of view, something directly
packable/unpackable without need for relayouting.
"""
import logging
import struct
from typing import Dict

from .enum import Compliant
from .meta import FieldBase
from .properties import Dependency
from .streams import Stream
from .exceptions import SLIException, UnpackException, MagicException
from .hash40 import hash40, format_hash40, parse_hash40_literal, is_hash40_literal


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, name=None, father=None, default=None, offset=None,
                 compliant=Compliant.INHERIT, is_magic=False):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset
        self.compliant = compliant
        self.is_magic = is_magic

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def get_dependencies(self) -> Dict[str, Dependency]:
        """Return the dictionary containing as key the attribute holding a Dependency"""
        instance_dict = self.__dict__
        return {_k: _v for _k, _v in instance_dict.items() if isinstance(_v, Dependency)}

    def is_compliant(self, level):
        '''Walk up the hierarchy as long as the fields inherit their compliance.'''
        instance = self
        while instance is not None:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = instance.father

        return False

    def _get_value(self):
        return self._value

    def _set_value(self, value):
        self._value = value

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _get_raw(self) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_raw() not implemented")

    def _set_raw(self, value) -> None:
        raise NotImplementedError(f"method {self.__class__.__name__}._set_raw() not implemented")

    raw = property(
        fget=lambda self: self._get_raw(),
        fset=lambda self, value: self._set_raw(value),
    )

    def _default_raw(self) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}._default_raw() not implemented")

    def _check_magic(self, raw: bytes) -> None:
        if not self.is_magic:
            return

        expected = self._default_raw()
        if raw == expected:
            return

        self.logger.warning("the magic for field '%s' doesn't correspond: %r", self.name, raw)
        if self.is_compliant(Compliant.MAGIC):
            raise MagicException(found=raw, expected=expected)

    def relayout(self, offset=0):
        self.logger.debug("relayouting %s", self.__class__.__name__)
        self.offset = offset

        return self.size

    def pack(self, stream=None, relayout=True):
        '''Write the raw representation at the offset decided by the last relayout
        and return it.'''
        if relayout:
            self.relayout(offset=self.offset or 0)

        raw = self.raw

        if stream is not None:
            stream.seek(self.offset)
            stream.write(raw)

        return raw

    def unpack(self, stream):
        self.offset = stream.tell()

        raw = stream.read_exact(self.size)
        self.logger.debug("unpacking '%s' at offset 0x%x: %r", self.name, self.offset, raw)

        self._check_magic(raw)
        self.raw = raw


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.
    """

    def __init__(self, format, default=0, **kw):
        self.format = format
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def __str__(self):
        width = self.size * 2  # we want to be as large as possible
        formatter = '0x%%0%dx' % width
        return formatter % (self.value,)

    def get_format(self):
        return '<%s' % self.format

    def _set_value(self, value) -> None:
        try:
            struct.pack(self.get_format(), value)
        except struct.error as e:
            raise ValueError(f"{value!r} doesn't fit into field '{self.name}' with format '{self.format}'") from e

        super()._set_value(value)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _get_raw(self) -> bytes:
        return struct.pack(self.get_format(), self.value)

    def _set_raw(self, raw: bytes) -> None:
        self.value = self._unpack(raw)

    def _default_raw(self) -> bytes:
        return struct.pack(self.get_format(), self.default)

    def _unpack(self, raw: bytes) -> int:
        try:
            unpacked_value = struct.unpack(self.get_format(), raw)[0]
        except struct.error as e:
            self.logger.error(e)
            raise UnpackException(chain=[])

        return unpacked_value


class Hash40Field(StructField):
    """A 64 bit identifier obtained hashing a label with hash40().

    It can be set directly with an integer or from its textual form,
    i.e. a "0x" prefixed hexadecimal literal or the label itself."""

    def __init__(self, default=0, **kw):
        super().__init__('Q', default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, format_hash40(self.value))

    def __str__(self):
        return format_hash40(self.value)

    def as_text(self, labels=None) -> str:
        '''The label if the registry knows it, the hexadecimal literal otherwise.'''
        label = labels.lookup(self.value) if labels is not None else None

        return label if label is not None else format_hash40(self.value)

    def from_text(self, text: str) -> None:
        '''The label is hashed again, never looked up in a registry.'''
        self.value = parse_hash40_literal(text) if is_hash40_literal(text) else hash40(text)


class StringField(Field):
    """Represent a contiguous chunk of bytes."""

    def __init__(self, n=None, **kw):
        if n is None and 'default' not in kw:
            raise ValueError("StringField must have 'n' or 'default' indicated!")

        self.length = n or len(kw['default'])

        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    def __len__(self):
        return self.length

    def value_from_default(self):
        return b'\x00' * self.length if not self.default else self.default

    def _get_size(self):
        return self.length

    def _set_value(self, value) -> None:
        if len(value) != self.length:
            raise ValueError(f'you are trying to set a value with the wrong size (that is {self.length} bytes)')

        super()._set_value(bytes(value))

    def _get_raw(self):
        return self.value

    def _set_raw(self, raw: bytes) -> None:
        self.value = raw

    def _default_raw(self) -> bytes:
        return self.value_from_default()


class ArrayField(Field):
    '''Un/Pack an array of Chunks.

    You can indicate an explicit number of elements via the parameter named "n"
    or a Dependency pointing to the field that contains it: in the latter case
    the field is updated with the actual number of elements at each relayout.

    This class must behave like a list in python, obviously cannot implement all the methods
    since, for example, slicing what should mean?
    '''

    def __init__(self, field_cls, n=0, **kw):
        if not isinstance(n, (Dependency, int)):
            raise ValueError("n is '%s' must be of the right type" % n.__class__.__name__)

        self.field_cls = field_cls
        self._n = n

        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __iter__(self):
        return iter(self.value)

    def __len__(self):
        return len(self.value)

    def value_from_default(self):
        if isinstance(self._n, int):
            return [self.instance_element() for _ in range(self._n)]

        return []

    def _set_value(self, value):
        elements = list(value)
        for element in elements:
            element.father = self

        super()._set_value(elements)

    def get_count(self) -> int:
        if isinstance(self._n, Dependency):
            return self._n.resolve(self)

        return self._n

    def _update_count(self):
        count = len(self.value)

        if isinstance(self._n, Dependency):
            if self.father is not None:
                self._n.resolve_and_set(self, count)
        else:
            self._n = count

    def _get_raw(self):
        return b''.join([element.raw for element in self.value])

    def _get_size(self):
        return sum([element.size for element in self.value])

    def relayout(self, offset=0):
        self.offset = offset
        size = 0
        for element in self.value:
            size += element.relayout(offset=offset + size)

        self._update_count()

        return size

    def pack(self, stream=None, relayout=True):
        if relayout:
            self.relayout(offset=self.offset or 0)

        stream = Stream(b'') if stream is None else stream

        raw = b''.join([element.pack(stream=stream, relayout=False) for element in self.value])

        return raw

    def unpack(self, stream):
        self.offset = stream.tell()

        count = self.get_count()
        self.logger.debug("unpacking %d elements for '%s'", count, self.name)

        elements = []
        for idx in range(count):
            element = self.instance_element()
            try:
                element.unpack(stream)
            except SLIException as e:
                e.chain.insert(0, str(idx))
                raise
            elements.append(element)

        self.value = elements

    def instance_element(self):
        # pass the father so that we don't lose the hierarchy
        return self.field_cls(father=self)

    def append(self, element):
        element.father = self
        self.value.append(element)
        self._update_count()

    def extend(self, elements):
        for element in elements:
            self.append(element)

    def insert(self, index, element):
        element.father = self
        self.value.insert(index, element)
        self._update_count()

    def remove(self, element):
        self.value.remove(element)
        self._update_count()

    def clear(self):
        self.value.clear()
        self._update_count()
