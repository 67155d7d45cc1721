'''
Hash40 values cannot be reversed: the only way to display them as something
readable is to have a list of the labels they could have been generated from.

The usual source is a text file with a label per line (the community
maintained "Hashes.txt")::

    registry = LabelRegistry()
    registry.load('Hashes.txt')

    registry.lookup(hash40('bgm_crs01_menu'))  # 'bgm_crs01_menu'

Each load replaces the previous contents entirely.
'''
import logging
import threading
from typing import Dict, Optional

from .hash40 import hash40


logger = logging.getLogger(__name__)


class LabelRegistry(object):
    '''Mapping from hash40 to label, safe to share between threads.'''

    def __init__(self):
        self._lock = threading.Lock()
        self._labels: Dict[int, str] = {}

    def __repr__(self):
        return f'<{self.__class__.__name__}({len(self)} labels)>'

    def __len__(self):
        with self._lock:
            return len(self._labels)

    def __contains__(self, value):
        with self._lock:
            return value in self._labels

    @staticmethod
    def _build(contents: str) -> Dict[int, str]:
        labels = {}
        for line in contents.split('\n'):
            label = line.strip()
            labels[hash40(label)] = label

        return labels

    def loads(self, contents: str) -> None:
        labels = self._build(contents)

        with self._lock:
            self._labels = labels

        logger.debug('loaded %d labels', len(labels))

    def load(self, path) -> None:
        '''If the file cannot be read the OSError is raised and the
        registry keeps what it had before.'''
        logger.debug("loading labels from '%s'", path)
        with open(path, 'r', encoding='utf-8') as f:
            contents = f.read()

        self.loads(contents)

    def lookup(self, value: int) -> Optional[str]:
        with self._lock:
            return self._labels.get(value)

    def clear(self) -> None:
        with self._lock:
            self._labels = {}
