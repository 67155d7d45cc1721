import pytest

from soundlabelinfo.enum import Compliant
from soundlabelinfo.exceptions import MagicException, UnexpectedEOFException
from soundlabelinfo.formats.sli import SLIFile, SLIEntry, SLIFormat, sniff
from soundlabelinfo.hash40 import hash40


def test_scenario(scenario):
    sli = SLIFile.from_bytes(scenario)

    assert sli.version.value == 1
    assert len(sli.entries) == 1

    entry = sli.entries[0]
    assert entry.name_id.value == 0xaaaaaaaaaaaaaaaa
    assert entry.bank_id.value == 2
    assert entry.tone_id.value == 3

    assert sli.pack() == scenario


def test_round_trip(sli_path):
    """Check unpacking a pre-established table and packing it again gives back the same bytes"""
    original = sli_path.read_bytes()

    sli = SLIFile.open(sli_path)

    assert [_.name_id.value for _ in sli.entries] == [
        hash40('bgm_crs01_menu'),
        hash40('se_common_swing_01'),
        0xaaaaaaaaaaaaaaaa,
    ]
    assert sli.pack() == original


def test_open_from_file_object(sli_path):
    with open(sli_path, 'rb') as f:
        sli = SLIFile(f)

        assert not f.closed

    assert len(sli.entries) == 3


def test_layout(scenario):
    sli = SLIFile.from_bytes(scenario)

    assert sli.layout == {
        'magic': (0, 4),
        'version': (4, 4),
        'count': (8, 4),
        'entries': (12, 16),
    }


@pytest.mark.parametrize('data', [
    b'SLJ\x00\x01\x00\x00\x00\x00\x00\x00\x00',
    b'sli\x00\x01\x00\x00\x00\x01\x00\x00\x00',
    b'\x00\x00\x00\x00',
    b'version: 1\nentries: []\n',
])
def test_magic(data):
    with pytest.raises(MagicException) as excinfo:
        SLIFile.from_bytes(data)

    assert excinfo.value.found == data[:4]
    assert excinfo.value.expected == b'SLI\x00'
    assert excinfo.value.chain == ['magic']


def test_magic_not_compliant(scenario):
    data = b'SLJ\x00' + scenario[4:]

    sli = SLIFile.from_bytes(data, compliant=Compliant.NONE)

    assert sli.magic.value == b'SLJ\x00'
    assert len(sli.entries) == 1
    assert sli.pack() == data


def test_truncated_entry(scenario):
    with pytest.raises(UnexpectedEOFException) as excinfo:
        SLIFile.from_bytes(scenario[:-1])

    assert excinfo.value.chain == ['entries', '0', 'tone_id']
    assert excinfo.value.offset == 24
    assert excinfo.value.wanted == 4
    assert excinfo.value.got == 3


def test_truncated_header():
    with pytest.raises(UnexpectedEOFException) as excinfo:
        SLIFile.from_bytes(b'SLI\x00\x01')

    assert excinfo.value.chain == ['version']


def test_count_bigger_than_entries(scenario):
    data = scenario[:8] + b'\x02\x00\x00\x00' + scenario[12:]

    with pytest.raises(UnexpectedEOFException) as excinfo:
        SLIFile.from_bytes(data)

    assert excinfo.value.chain == ['entries', '1', 'name_id']


def test_trailing_data_is_ignored(scenario):
    sli = SLIFile.from_bytes(scenario + b'\xff' * 5)

    assert len(sli.entries) == 1
    assert sli.pack() == scenario


def test_count_follows_entries(scenario):
    sli = SLIFile.from_bytes(scenario)

    assert sli.count.value == 1

    sli.entries.append(SLIEntry.new(0xaaaaaaaaaaaaaaaa, 2, 4))
    sli.count = 10

    data = sli.pack()

    assert data[8:12] == b'\x02\x00\x00\x00'
    assert len(data) == 12 + 2 * 16
    assert sli.count.value == 2

    sli.entries.remove(sli.entries[0])

    assert sli.pack()[8:12] == b'\x01\x00\x00\x00'

    sli.entries.clear()

    assert sli.pack() == b'SLI\x00\x01\x00\x00\x00\x00\x00\x00\x00'


def test_new(scenario):
    sli = SLIFile.new(1, [(0xaaaaaaaaaaaaaaaa, 2, 3)])

    assert sli.pack() == scenario

    sli = SLIFile.new(1, [SLIEntry.new(0xaaaaaaaaaaaaaaaa, 2, 3)])

    assert sli.pack() == scenario


def test_default():
    sli = SLIFile()

    assert sli.pack() == b'SLI\x00\x01\x00\x00\x00\x00\x00\x00\x00'


def test_duplicated_names():
    name_id = hash40('bgm_crs01_menu')
    sli = SLIFile.new(1, [(name_id, 2, 3), (name_id, 2, 4)])

    again = SLIFile.from_bytes(sli.pack())

    assert [_.name_id.value for _ in again.entries] == [name_id, name_id]
    assert [_.tone_id.value for _ in again.entries] == [3, 4]


def test_edit_tone_id(sli_path):
    sli = SLIFile.open(sli_path)

    for entry in sli.entries:
        entry.tone_id = 0

    edited = SLIFile.from_bytes(sli.pack())

    assert [_.tone_id.value for _ in edited.entries] == [0, 0, 0]
    assert [_.bank_id.value for _ in edited.entries] == [2, 2, 5]


def test_insert_keeps_order(scenario):
    sli = SLIFile.from_bytes(scenario)

    sli.entries.insert(0, SLIEntry.new(1, 1, 1))
    data = sli.pack()

    assert data[12:20] == b'\x01' + b'\x00' * 7
    assert data[28:] == scenario[12:]


def test_save(tmp_path, sli_path):
    out = tmp_path / 'out.sli'

    SLIFile.open(sli_path).save(out)

    assert out.read_bytes() == sli_path.read_bytes()


@pytest.mark.parametrize('data,kind', [
    (b'SLI\x00\x01\x00\x00\x00', SLIFormat.BINARY),
    (b'version: 1\nentries: []\n', SLIFormat.TEXT),
    (b'SL', SLIFormat.TEXT),
    (b'\xff\xfe\x00', SLIFormat.UNKNOWN),
    (b'\x80\x81', SLIFormat.UNKNOWN),
    (b'', SLIFormat.UNKNOWN),
])
def test_sniff(data, kind):
    assert sniff(data) == kind
