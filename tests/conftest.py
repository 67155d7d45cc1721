from pathlib import Path

import pytest


@pytest.fixture
def test_root_dir():
    return Path(__file__).parent


@pytest.fixture
def sli_path(test_root_dir):
    return test_root_dir / 'extra' / 'sli' / 'soundlabelinfo.sli'


@pytest.fixture
def hashes_path(test_root_dir):
    return test_root_dir / 'extra' / 'sli' / 'Hashes.txt'


@pytest.fixture
def scenario():
    '''A table with a single entry.'''
    return bytes.fromhex(
        '534c4900'
        '01000000'
        '01000000'
        'aaaaaaaaaaaaaaaa'
        '02000000'
        '03000000'
    )
