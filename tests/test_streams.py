import io

import pytest

from soundlabelinfo.exceptions import UnexpectedEOFException
from soundlabelinfo.streams import Stream


def test_bytes_stream():
    data = b'\x01\x02\x03\x04\x05'

    stream = Stream(data)

    assert stream.read(1) == b'\x01'
    assert stream.read_exact(1) == b'\x02'
    assert stream.read_exact(3) == b'\x03\x04\x05'
    assert stream.tell() == 5


def test_file_stream(tmp_path):
    data = b'\x01\x02\x03\x04\x05'
    path_data = tmp_path / 'auaua'
    path_data.write_bytes(data)

    with Stream(path_data) as stream:
        assert stream.read(1) == b'\x01'
        assert stream.read(1) == b'\x02'
        assert stream.read_exact(3) == b'\x03\x04\x05'
        assert stream.tell() == 5

    assert stream.obj.closed

    with Stream(str(path_data)) as stream:
        assert stream.read_exact(5) == data


def test_read_exact_eof():
    stream = Stream(b'\x01\x02\x03')
    stream.seek(1)

    with pytest.raises(UnexpectedEOFException) as excinfo:
        stream.read_exact(4)

    assert excinfo.value.offset == 1
    assert excinfo.value.wanted == 4
    assert excinfo.value.got == 2


def test_file_object_is_not_closed():
    fileobj = io.BytesIO(b'\x01\x02')

    with Stream(fileobj) as stream:
        stream.read_exact(2)

    assert not fileobj.closed


def test_write():
    stream = Stream(b'')
    stream.write(b'\x01\x02')
    stream.seek(1)

    assert stream.read_exact(1) == b'\x02'


def test_wrong_offset():
    with pytest.raises(ValueError):
        Stream(b'').seek('0')
