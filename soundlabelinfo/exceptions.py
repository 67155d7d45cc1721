class SLIException(Exception):
    '''Base class to extend in order to throw exception in soundlabelinfo.

    It takes a single argument that represents the chain of the layer that
    caused the exception: each chunk the exception travels through prepends
    the name of its field.
    '''

    def __init__(self, chain=None):
        self.chain = chain if chain is not None else []
        super().__init__()

    def describe(self):
        return ''

    def __str__(self):
        where = '.'.join(self.chain)
        what = self.describe()
        if where and what:
            return f'{where}: {what}'

        return where or what


class UnpackException(SLIException):
    pass


class UnexpectedEOFException(UnpackException):
    '''The data is shorter than the structure it declares.'''

    def __init__(self, offset, wanted, got, chain=None):
        self.offset = offset
        self.wanted = wanted
        self.got = got
        super().__init__(chain=chain)

    def describe(self):
        return f'wanted {self.wanted} bytes at offset 0x{self.offset:x}, got {self.got}'


class MagicException(SLIException):

    def __init__(self, found, expected, chain=None):
        self.found = found
        self.expected = expected
        super().__init__(chain=chain)

    def describe(self):
        return f'bad magic {self.found!r} (expected {self.expected!r})'


class InvalidLiteralException(SLIException, ValueError):
    '''A "0x" prefixed identifier that is not a valid 64 bit hexadecimal number.'''

    def __init__(self, literal, chain=None):
        self.literal = literal
        super().__init__(chain=chain)

    def describe(self):
        return f'{self.literal} is an invalid Hash40'


class TextFormatException(SLIException, ValueError):

    def __init__(self, message, chain=None):
        self.message = message
        super().__init__(chain=chain)

    def describe(self):
        return self.message
