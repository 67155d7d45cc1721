'''
# YAML representation of the table

The binary table is rendered as a YAML document for inspection and bulk
editing::

    version: 1
    entries:
    - name_id: bgm_crs01_menu
      bank_id: 2
      tone_id: 3
    - name_id: '0xaaaaaaaaaaaaaaaa'
      bank_id: 2
      tone_id: 4

The name_id is the label when the LabelRegistry knows it, the hexadecimal
literal otherwise. When parsing back, a label is hashed again with hash40():
the registry is never used in that direction. The name_id is always read as
the text written in the document, so labels like `123` or `yes` are hashed
too, and never taken as numbers or booleans.

Documents written by the original tool are accepted too: there the table is
a sequence of two elements (version and entries), and the entries use the
keys tone_name and nus3bank_id::

    ---
    - 1
    - - tone_name: bgm_crs01_menu
        nus3bank_id: 2
        tone_id: 3
'''
import logging
from typing import Any, Dict, List

import yaml

from .exceptions import SLIException, TextFormatException
from .formats.sli import SLIFile, SLIEntry


logger = logging.getLogger(__name__)

ENTRY_KEYS = ('name_id', 'bank_id', 'tone_id')

# keys used by the original tool
ENTRY_ALIASES = {
    'tone_name': 'name_id',
    'nus3bank_id': 'bank_id',
}

NAME_KEYS = ('name_id', 'tone_name')


class TableLoader(yaml.SafeLoader):
    '''A SafeLoader that keeps the identifier of an entry as the text written
    in the document, without resolving it to an integer, a boolean or null.'''

    def construct_mapping(self, node, deep=False):
        mapping = super().construct_mapping(node, deep=deep)

        for key_node, value_node in node.value:
            if not isinstance(key_node, yaml.ScalarNode) or key_node.value not in NAME_KEYS:
                continue
            if isinstance(value_node, yaml.ScalarNode):
                mapping[key_node.value] = self.construct_scalar(value_node)

        return mapping


def render_entry(entry: SLIEntry, labels=None) -> Dict[str, Any]:
    return {
        'name_id': entry.name_id.as_text(labels),
        'bank_id': entry.bank_id.value,
        'tone_id': entry.tone_id.value,
    }


def render(sli: SLIFile, labels=None) -> Dict[str, Any]:
    return {
        'version': sli.version.value,
        'entries': [render_entry(_, labels) for _ in sli.entries],
    }


def _normalize_entry(document) -> Dict[str, Any]:
    if not isinstance(document, dict):
        raise TextFormatException(f'an entry must be a mapping, not {type(document).__name__}')

    entry = {}
    for key, value in document.items():
        key = ENTRY_ALIASES.get(key, key)
        if key in entry:
            raise TextFormatException(f'{key} is given twice')
        entry[key] = value

    missing = [_ for _ in ENTRY_KEYS if _ not in entry]
    if missing:
        raise TextFormatException(f"missing {', '.join(missing)}")

    return entry


def parse_entry(document) -> SLIEntry:
    document = _normalize_entry(document)

    entry = SLIEntry()

    name_id = document['name_id']
    if not isinstance(name_id, str):
        raise TextFormatException(f'must be a label or a 0x literal, not {name_id!r}', chain=['name_id'])

    try:
        entry.name_id.from_text(name_id)
    except SLIException as e:
        e.chain.insert(0, 'name_id')
        raise

    for key in ENTRY_KEYS[1:]:
        value = document[key]
        if not isinstance(value, int) or isinstance(value, bool):
            raise TextFormatException(f'must be an integer, not {value!r}', chain=[key])
        _set_integer(entry, key, value)

    return entry


def _set_integer(chunk, name, value):
    try:
        setattr(chunk, name, value)
    except ValueError as e:
        raise TextFormatException(str(e), chain=[name]) from e


def _split_document(document):
    if isinstance(document, dict):
        if 'version' not in document or 'entries' not in document:
            raise TextFormatException("the table needs both 'version' and 'entries'")
        return document['version'], document['entries']

    if isinstance(document, list) and len(document) == 2:
        return document[0], document[1]

    raise TextFormatException('unrecognized document: expected a mapping with version and entries')


def parse(document) -> SLIFile:
    version, entries = _split_document(document)

    if not isinstance(version, int) or isinstance(version, bool):
        raise TextFormatException(f'must be an integer, not {version!r}', chain=['version'])

    if entries is None:
        entries = []
    if not isinstance(entries, list):
        raise TextFormatException('must be a sequence', chain=['entries'])

    sli = SLIFile()
    _set_integer(sli, 'version', version)

    parsed: List[SLIEntry] = []
    for idx, entry in enumerate(entries):
        try:
            parsed.append(parse_entry(entry))
        except SLIException as e:
            e.chain[:0] = ['entries', str(idx)]
            raise

    sli.entries = parsed
    sli.relayout()

    logger.debug('parsed %d entries', len(parsed))

    return sli


def dumps(sli: SLIFile, labels=None) -> str:
    return yaml.safe_dump(render(sli, labels), default_flow_style=False, sort_keys=False)


def dump(sli: SLIFile, stream, labels=None) -> None:
    yaml.safe_dump(render(sli, labels), stream, default_flow_style=False, sort_keys=False)


def loads(text) -> SLIFile:
    try:
        document = yaml.load(text, Loader=TableLoader)
    except yaml.YAMLError as e:
        raise TextFormatException(f'invalid YAML: {e}') from e

    return parse(document)


def load(stream) -> SLIFile:
    return loads(stream.read())
