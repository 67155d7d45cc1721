"""
# soundlabelinfo

Read, edit and write the `soundlabelinfo.sli` tables of Smash Ultimate.

The binary table is described declaratively, with each subcomponent of the
file format defined as a field of a Chunk class; two basic operations are
defined for the format and its sub components:

 1. unpack(): reading the binary data and build a high-level representation
    of that. The chunk itself knows how many bytes needs to read to finalize
    the representation

 2. pack(): encode the high-level representation into binary data; a packing
    also implies a relayouting, i.e. offsets and derived values (like the
    number of entries) are recomputed.

Identifiers are hash40 values (see hash40.py): a LabelRegistry maps them back
to readable labels when the table is rendered as YAML (see text.py).
"""
from .hash40 import hash40
from .labels import LabelRegistry
from .formats.sli import SLIFile, SLIEntry, SLIFormat, sniff
