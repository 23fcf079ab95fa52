"""Fingerprint indexing and set operations across bibliography files."""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from .exceptions import EmptyInputError, NoCommonRecordsError, UnsupportedOperationError
from .model import File, Record
from .report import format_report
from .text import only_ascii_alphanumeric
from .types import DedupIndex, Occurrence

logger = logging.getLogger(__name__)

# Pseudo field name selecting the citation key itself
CITEKEY = "citekey"


class SetAction(enum.Enum):
    """Set operations supported by :func:`deduplicate`."""

    NONE = "none"
    # One representative per fingerprint with two or more occurrences
    INTERSECT = "intersect"
    # One representative per fingerprint
    UNION = "union"
    # Every record of every input file, in order
    CONCAT = "concat"


@dataclass
class DedupReport:
    """Result of indexing records by fingerprint.

    ``index`` maps every fingerprint to its occurrences in file-then-record
    order, including fingerprints seen only once.
    """

    duplicate_set_count: int = 0
    index: DedupIndex = field(default_factory=dict)
    result_set_count: int = 0

    def duplicate_sets(self) -> Iterator[tuple[str, list[Occurrence]]]:
        """Yield ``(fingerprint, occurrences)`` for sets with two or more members."""
        for fingerprint, occurrences in self.index.items():
            if len(occurrences) > 1:
                yield fingerprint, occurrences

    def __str__(self) -> str:
        return format_report(self)


def fingerprint(record: Record, field_names: Sequence[str]) -> str:
    """Build the deduplication fingerprint of ``record``.

    The values of ``field_names`` are concatenated, lower-cased and reduced to
    ASCII letters and digits. An empty ``field_names`` selects the citation
    key, used literally. When ``citekey`` is listed among other names the key
    is appended, unfolded, after the folded field values.
    """
    names = [name for name in field_names if name != CITEKEY]
    use_key = not field_names or len(names) != len(field_names)

    value = only_ascii_alphanumeric("".join(record.field(name) for name in names))
    if use_key:
        value += record.key
    return value


def build_index(files: Sequence[File], field_names: Sequence[str]) -> DedupIndex:
    index: DedupIndex = {}
    for file in files:
        for record in file.records:
            index.setdefault(fingerprint(record, field_names), []).append(
                Occurrence(record, file)
            )
    return index


def deduplicate(
    files: Sequence[File],
    field_names: Sequence[str] = (),
    action: SetAction = SetAction.NONE,
) -> tuple[File | None, DedupReport]:
    """Index records across ``files`` and optionally merge them.

    Args:
        files: Files to process, in priority order. For union and
            intersection the first occurrence of a fingerprint is kept.
        field_names: Fields making up the fingerprint. Empty means the
            citation key.
        action: Set operation to perform. ``SetAction.NONE`` only reports.

    Returns:
        Tuple of (merged file or None for ``SetAction.NONE``, report)

    Raises:
        EmptyInputError: If there are no files or no records at all
        NoCommonRecordsError: If an intersection finds no duplicate sets
        UnsupportedOperationError: If ``action`` is not a known set action
    """
    if not isinstance(action, SetAction):
        raise UnsupportedOperationError(f"invalid set action: {action!r}")
    if not any(file.records for file in files):
        raise EmptyInputError("nothing to deduplicate")

    index = build_index(files, field_names)
    report = DedupReport(
        duplicate_set_count=sum(1 for occurrences in index.values() if len(occurrences) > 1),
        index=index,
    )
    logger.debug(
        "Indexed %d fingerprints over %d files using %s",
        len(index),
        len(files),
        ",".join(field_names) or CITEKEY,
    )

    if action is SetAction.NONE:
        return None, report

    if action is SetAction.INTERSECT:
        if report.duplicate_set_count == 0:
            raise NoCommonRecordsError("no common records")
        result = File(name="intersection.bib")
        for _, occurrences in report.duplicate_sets():
            result.add_record(occurrences[0].record)
    elif action is SetAction.UNION:
        result = File(name="union.bib")
        for occurrences in index.values():
            result.add_record(occurrences[0].record)
    else:
        result = File(name="concat.bib")
        for file in files:
            for record in file.records:
                result.add_record(record)

    report.result_set_count = result.record_count()
    logger.info(
        "%s: %d duplicate sets, %d records in result",
        action.value,
        report.duplicate_set_count,
        report.result_set_count,
    )
    return result, report


def valid_keys(file: File) -> bool:
    """Return True when no two records of ``file`` share a citation key."""
    try:
        _, report = deduplicate([file])
    except EmptyInputError:
        return True
    return report.duplicate_set_count == 0
