import io
import logging
import os

from .exceptions import UnexpectedEOFException


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/file object to
    uniform its properties: mainly we need to have a read_exact() method
    that fails loudly when the data ends before the format does.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        if isinstance(obj, os.PathLike):
            obj = os.fspath(obj)

        self._owned = isinstance(obj, (str, bytes, bytearray))
        self.obj = obj

        if isinstance(obj, str):
            # we think this is a path
            logger.debug("opening path '%s'", obj)
            self.obj = open(obj, 'rb')
        elif isinstance(obj, (bytes, bytearray)):
            self.obj = io.BytesIO(obj)

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.obj!r})>'

    def close(self):
        '''Only what we opened ourselves gets closed.'''
        if self._owned:
            self.obj.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError("'%s' is the wrong kind of offset to use" % offset.__class__.__name__)

        self.obj.seek(offset)

    def read_exact(self, size):
        offset = self.obj.tell()
        data = self.obj.read(size)

        if len(data) != size:
            raise UnexpectedEOFException(offset, size, len(data))

        return data

    def write(self, data):
        return self.obj.write(data)
