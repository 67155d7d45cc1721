#!/usr/bin/env python3
'''
Convert a soundlabelinfo.sli table into YAML and back.

 $ slitool.py soundlabelinfo.sli soundlabelinfo.yml -l Hashes.txt
 $ slitool.py soundlabelinfo.yml soundlabelinfo.sli
'''
import argparse
import logging
import sys
import os

from soundlabelinfo import LabelRegistry, SLIFile, SLIFormat, sniff
from soundlabelinfo import text
from soundlabelinfo.exceptions import SLIException


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_LABELS_PATH = 'Hashes.txt'


def parse_args(argv):
    parser = argparse.ArgumentParser(
        prog=os.path.basename(argv[0]),
        description='Convert a sound label info table into YAML and a YAML file back into a table; '
                    'the direction is guessed from the content of the input',
    )
    parser.add_argument('in_file', help='table or YAML to convert')
    parser.add_argument('out_file', help='where to write the result')
    parser.add_argument('-l', '--labels', default=DEFAULT_LABELS_PATH,
                        help=f'labels used to render the identifiers (default: {DEFAULT_LABELS_PATH})')

    return parser.parse_args(argv[1:])


def load_labels(path):
    labels = LabelRegistry()
    try:
        labels.load(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("labels not loaded from '%s': %s", path, e)

    return labels


def to_yaml(data, out_path, labels_path):
    sli = SLIFile.from_bytes(data)
    labels = load_labels(labels_path)

    with open(out_path, 'w', encoding='utf-8') as f:
        text.dump(sli, f, labels=labels)

    logger.info("written %d entries to '%s'", len(sli.entries), out_path)


def to_binary(data, out_path):
    sli = text.loads(data.decode('utf-8'))
    sli.save(out_path)

    logger.info("written %d entries to '%s'", len(sli.entries), out_path)


def main(argv):
    args = parse_args(argv)

    try:
        with open(args.in_file, 'rb') as f:
            data = f.read()

        kind = sniff(data)
        if kind == SLIFormat.BINARY:
            to_yaml(data, args.out_file, args.labels)
        elif kind == SLIFormat.TEXT:
            to_binary(data, args.out_file)
        else:
            logger.error("'%s' is neither a sound label info table nor its YAML", args.in_file)
            return 1
    except (SLIException, OSError) as e:
        logger.error('An error occurred: %s', e)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv))
