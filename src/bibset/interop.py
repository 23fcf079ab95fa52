"""Conversion between the bibset model and bibtexparser v2 libraries."""

import logging

import bibtexparser
from bibtexparser.library import Library
from bibtexparser.model import Entry
from bibtexparser.model import Field as BtpField

from .model import Field, File, Record

logger = logging.getLogger(__name__)


def to_library(file: File) -> Library:
    """Build a bibtexparser ``Library`` holding copies of the records of ``file``.

    Field order is kept. bibtexparser moves records whose key is already in
    the library to ``failed_blocks``, so run key repair first.
    """
    entries = [
        Entry(
            entry_type=record.type,
            key=record.key,
            fields=[BtpField(key=fld.key, value=fld.value) for fld in record.fields],
        )
        for record in file.records
    ]
    logger.debug(f"Converted {len(entries)} records of {file.name} to a bibtexparser library")
    return Library(entries)


def from_library(library: Library, name: str) -> File:
    """Build a :class:`File` from the entries of a bibtexparser ``Library``.

    Non-entry blocks (comments, preambles, strings) are dropped. Line numbers
    are 1-based where bibtexparser recorded a start line and 0 otherwise.
    """
    file = File(name=name)
    for entry in library.entries:
        record = Record(type=entry.entry_type, key=entry.key, line=_line_of(entry))
        for fld in entry.fields:
            record.add_field(Field(key=fld.key, value=str(fld.value), line=_line_of(fld)))
        file.add_record(record)
    return file


def _line_of(block: Entry | BtpField) -> int:
    start_line = getattr(block, "start_line", None)
    return start_line + 1 if start_line is not None else 0


def to_bibtex_string(file: File) -> str:
    """Render ``file`` with bibtexparser's writer."""
    return str(bibtexparser.write_string(to_library(file)))
