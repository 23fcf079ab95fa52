"""Human-readable and JSON renderings of deduplication reports."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import msgspec

from .writer import dump

if TYPE_CHECKING:
    from .dedup import DedupReport

logger = logging.getLogger(__name__)

RULE = "*" * 60


class OccurrenceSummary(msgspec.Struct):
    """Where one member of a duplicate set was found."""

    file: str
    line: int
    key: str
    type: str


class DuplicateSetSummary(msgspec.Struct):
    fingerprint: str
    occurrences: list[OccurrenceSummary]


class ReportSummary(msgspec.Struct):
    duplicate_set_count: int
    result_set_count: int
    duplicate_sets: list[DuplicateSetSummary]


def print_report(report: DedupReport, stream: TextIO) -> None:
    """Write every duplicate set with the source location of each member.

    Nothing is written when the report has no duplicate sets.
    """
    if report.duplicate_set_count == 0:
        return
    stream.write(f"{report.duplicate_set_count} duplicate sets found\n")
    for fingerprint, occurrences in report.duplicate_sets():
        stream.write(f"{RULE}\n[{fingerprint}] has {len(occurrences)} occurrences in lines \n")
        for occurrence in occurrences:
            stream.write(f"{occurrence.file.name}:{occurrence.record.line}\n")
            dump(occurrence.record, stream)


def format_report(report: DedupReport) -> str:
    buffer = io.StringIO()
    print_report(report, buffer)
    return buffer.getvalue()


def summarize(report: DedupReport) -> ReportSummary:
    return ReportSummary(
        duplicate_set_count=report.duplicate_set_count,
        result_set_count=report.result_set_count,
        duplicate_sets=[
            DuplicateSetSummary(
                fingerprint=fingerprint,
                occurrences=[
                    OccurrenceSummary(
                        file=occ.file.name,
                        line=occ.record.line,
                        key=occ.record.key,
                        type=occ.record.type,
                    )
                    for occ in occurrences
                ],
            )
            for fingerprint, occurrences in report.duplicate_sets()
        ],
    )


def report_to_json(report: DedupReport) -> bytes:
    """Encode the duplicate sets of ``report`` as JSON."""
    return msgspec.json.encode(summarize(report))


def save_report_json(report: DedupReport, path: str | Path) -> None:
    with open(path, "wb") as f:
        f.write(report_to_json(report))
    logger.info(f"Saved duplicate report to {path}")
