"""Document model produced by the parser: files, records and fields."""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from typing import Union


@dataclass
class Field:
    """A ``name = value`` pair attached to a record."""

    key: str
    value: str
    line: int = 0

    def bibtex_repr(self) -> str:
        return f"{self.key}={{{self.value}}}"


@dataclass
class Record:
    """One bibliographic entry.

    ``type`` keeps the case it was scanned with. ``key`` may be empty until
    the key-repair pass runs. Fields keep parse order and the same name may
    appear more than once.
    """

    type: str
    key: str = ""
    line: int = 0
    fields: list[Field] = dataclass_field(default_factory=list)

    def add_field(self, fld: Field) -> None:
        self.fields.append(fld)

    def field(self, name: str) -> str:
        """Return the value of the first field called ``name``, or ``""``."""
        for fld in self.fields:
            if fld.key == name:
                return fld.value
        return ""

    def bibtex_repr(self) -> str:
        return f"\n@{self.type}{{{self.key},\n"


@dataclass
class File:
    """An ordered collection of records read from one source."""

    name: str
    records: list[Record] = dataclass_field(default_factory=list)

    def add_record(self, rec: Record) -> None:
        self.records.append(rec)

    def record_count(self) -> int:
        return len(self.records)


# Tree nodes below a File. Only these two kinds exist.
Node = Union[Record, Field]
