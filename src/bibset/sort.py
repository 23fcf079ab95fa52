"""Ordering and partitioning of bibliography records."""

import logging
import re

from .exceptions import EmptyInputError, UnsupportedOperationError
from .model import File, Record

logger = logging.getLogger(__name__)

# Entry type ascending, then year descending
TYPE_YEAR_DESC = "type,-year"

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def parse_year(record: Record) -> int | None:
    """Return the numeric ``year`` of ``record``, or None if missing or not a number."""
    value = record.field("year")
    if _INTEGER_RE.fullmatch(value):
        return int(value)
    return None


def _type_year_desc_key(record: Record) -> tuple[str, int, int]:
    year = parse_year(record)
    # Records without a usable year lead their type group
    if year is None:
        return (record.type, 0, 0)
    return (record.type, 1, -year)


def sort_records(file: File, spec: str = TYPE_YEAR_DESC) -> None:
    """Sort the records of ``file`` in place.

    Only ``"type,-year"`` is supported: entry type in ascending order, then
    year in descending order. Records whose year is missing or not numeric
    come first within their type. The sort is stable.

    Args:
        file: File to reorder
        spec: Comma-separated sort specification

    Raises:
        EmptyInputError: If ``file`` has no records
        UnsupportedOperationError: For any other sort specification
    """
    if not file.records:
        raise EmptyInputError("nothing to sort")
    if spec != TYPE_YEAR_DESC:
        raise UnsupportedOperationError(f"sort by {spec!r} not implemented")

    file.records.sort(key=_type_year_desc_key)
    logger.info(f"Sorted {file.record_count()} records in {file.name} by {spec}")


def split(file: File) -> dict[str, File]:
    """Partition ``file`` into one new file per entry type.

    Returns:
        Mapping from entry type to a file named ``<type>.bib`` holding that
        type's records in their original order
    """
    parts: dict[str, File] = {}
    for record in file.records:
        if record.type not in parts:
            parts[record.type] = File(name=f"{record.type}.bib")
        parts[record.type].add_record(record)

    logger.debug(f"Split {file.name} into {len(parts)} files: {', '.join(parts)}")
    return parts
