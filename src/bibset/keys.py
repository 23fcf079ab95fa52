"""Citation key generation and repair."""

from __future__ import annotations

import logging
import string
from collections.abc import Iterator, Sequence

from .dedup import DedupReport, deduplicate
from .model import File, Record
from .text import only_ascii_alphanumeric

logger = logging.getLogger(__name__)


def extract_lastname(author_str: str) -> str:
    """Return the lower-cased text before the first comma of ``author_str``.

    Falls back to the text before the first space when there is no comma.
    Surrounding braces and quotes are removed.
    """
    if "," in author_str:
        word = author_str.split(",", 1)[0]
    else:
        word = author_str.split(" ", 1)[0]
    return word.strip("{}\"").lower()


def new_cite_key(record: Record) -> str:
    """Build a conventional citation key for ``record``.

    The key is the first author's last name, the year, the first word of the
    title folded to ASCII letters and digits, the first letter of the entry
    type (``x`` without one) and the pages followed by the volume, e.g.
    ``fu2019metala169-1884``.
    """
    title_word = only_ascii_alphanumeric(record.field("title").split(" ", 1)[0])
    type_letter = record.type[0] if record.type else "x"
    return (
        extract_lastname(record.field("author"))
        + record.field("year")
        + title_word
        + type_letter
        + record.field("pages")
        + record.field("volume")
    )


def fields_cite_key(record: Record, field_names: Sequence[str]) -> str:
    """Concatenate ``field_names`` of ``record`` into an ASCII-only key."""
    return only_ascii_alphanumeric("".join(record.field(name) for name in field_names))


def suffix_letters() -> Iterator[str]:
    """Yield ``A`` .. ``Z``, then ``AA``, ``AB`` .. ``ZZ``, ``AAA`` and so on."""
    width = 1
    while True:
        yield from _letter_block(width)
        width += 1


def _letter_block(width: int) -> Iterator[str]:
    if width == 1:
        yield from string.ascii_uppercase
        return
    for head in string.ascii_uppercase:
        for tail in _letter_block(width - 1):
            yield head + tail


def _assign_key(file: File, index: int, key: str) -> None:
    record = file.records[index]
    logger.debug("Record at line %d: key %r -> %r", record.line, record.key, key)
    record.key = key


def fix_keys(
    file: File, field_names: Sequence[str] | None = None, overwrite: bool = False
) -> DedupReport:
    """Give every record of ``file`` a unique citation key, in place.

    Records without a key (or every record when ``overwrite`` is set) get a
    new key from :func:`new_cite_key`, or from ``field_names`` when given.
    Records sharing a key afterwards keep it for the first occurrence; later
    ones get a letter suffix (``A``, ``B``, ...) that is not already in use.

    Args:
        file: File whose records are re-keyed. Records are modified in place.
        field_names: Fields to build keys from instead of the default scheme
        overwrite: If True, replace every key rather than only empty ones

    Returns:
        The citation-key report taken before suffixes were added

    Raises:
        EmptyInputError: If ``file`` has no records
    """
    generated = 0
    for i, record in enumerate(file.records):
        if overwrite or not record.key:
            if field_names:
                key = fields_cite_key(record, field_names)
            else:
                key = new_cite_key(record)
            _assign_key(file, i, key)
            generated += 1

    _, report = deduplicate([file])
    if report.duplicate_set_count == 0:
        logger.info(f"Generated {generated} keys, no duplicates in {file.name}")
        return report

    positions = {id(record): i for i, record in enumerate(file.records)}
    used = set(report.index)
    renamed = 0
    for base, occurrences in report.duplicate_sets():
        suffixes = suffix_letters()
        for occurrence in occurrences[1:]:
            candidate = base + next(suffixes)
            while candidate in used:
                candidate = base + next(suffixes)
            used.add(candidate)
            _assign_key(file, positions[id(occurrence.record)], candidate)
            renamed += 1

    for record in file.records:
        if not record.key:
            logger.warning(f"Record at line {record.line} in {file.name} has an empty key")

    logger.info(
        f"Generated {generated} keys, disambiguated {renamed} records "
        f"in {report.duplicate_set_count} duplicate sets"
    )
    return report
