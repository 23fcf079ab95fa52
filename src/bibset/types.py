"""Type definitions for bibset data structures."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from .model import File, Record


class Occurrence(NamedTuple):
    """A record together with the file it was read from."""

    record: Record
    file: File


# Fingerprint -> occurrences, in file-then-record order
DedupIndex = dict[str, list[Occurrence]]
