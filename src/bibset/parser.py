"""Line-based parser for loosely structured BibTeX exports.

The grammar accepted here is deliberately permissive::

    Database  ::= (Junk '@' Entry)*
    Entry     ::= Record | Comment | StringDef | Preamble
    Record    ::= Type '{' Key ',' Field* '}'
    Field     ::= Name '=' Value
    Value     ::= '{' <raw text, one layer of braces stripped> '}'

Every line is classified by its first non-blank character: ``@`` opens an
entry, ``}`` closes one and anything else is a field assignment when inside
a record, or junk otherwise. A field value therefore has to fit on a single
line. ``@comment``, ``@preamble`` and ``@string`` blocks are recognised and
skipped without looking at their content.
"""

from __future__ import annotations

import enum
import io
import logging
from pathlib import Path
from typing import BinaryIO

from .exceptions import ParseError
from .model import Field, File, Record
from .reader import LineReader
from .text import trim_affixes

logger = logging.getLogger(__name__)

AT = "@"
LBRACE = "{"
RBRACE = "}"
EQUAL = "="

# Entry kinds whose bodies are skipped rather than parsed
IGNORED_ENTRY_TYPES = frozenset({"comment", "preamble", "string"})


class ParserState(enum.Enum):
    AT_ROOT = "at root"
    IN_RECORD = "in record"
    IGNORED = "ignored"


class Parser:
    """Single-use parser turning one byte stream into a :class:`File`."""

    def __init__(self, stream: BinaryIO, name: str, encoding: str = "utf-8") -> None:
        self._reader = LineReader(stream)
        self._encoding = encoding
        self.file = File(name=name)
        self.state = ParserState.AT_ROOT
        self._current: Record | None = None

    @property
    def line_num(self) -> int:
        return self._reader.line_num

    def _fail(self, message: str) -> ParseError:
        return ParseError(self.line_num, message, partial=self.file)

    def parse(self) -> File:
        for raw in self._reader:
            line = raw.decode(self._encoding, errors="surrogateescape")
            if self.line_num == 1:
                line = line.lstrip("\ufeff")
            line = line.lstrip()
            if not line:
                continue

            if line[0] == AT:
                self._start_entry(line)
            elif line[0] == RBRACE:
                self._close_entry()
            elif self.state is ParserState.IN_RECORD:
                self._add_field(line)

        if self.state is ParserState.IN_RECORD:
            assert self._current is not None
            raise self._fail(
                f"unexpected end of input: record {self._current.key!r} "
                f"opened at line {self._current.line} is not closed"
            )
        if self.state is ParserState.IGNORED:
            raise self._fail("unexpected end of input: block is not closed")

        logger.debug(
            "Parsed %d records from %s (%d lines, %d bytes)",
            self.file.record_count(),
            self.file.name,
            self.line_num,
            self._reader.offset,
        )
        return self.file

    def _start_entry(self, line: str) -> None:
        if self.state is ParserState.IN_RECORD:
            raise self._fail("invalid @; possibly record missing line starting with }")

        idx = line.find(LBRACE)
        if idx == -1:
            raise self._fail("{ is missing")

        entry_type = trim_affixes(line[1:idx], spaces_only=True)
        if entry_type.lower() in IGNORED_ENTRY_TYPES:
            # A closer on the same line means a one-line block
            if RBRACE in line[idx:]:
                self.state = ParserState.AT_ROOT
            else:
                self.state = ParserState.IGNORED
            logger.debug("Skipping @%s block at line %d", entry_type, self.line_num)
            return

        self._current = Record(
            type=entry_type,
            key=trim_affixes(line[idx + 1 :]),
            line=self.line_num,
        )
        self.state = ParserState.IN_RECORD

    def _close_entry(self) -> None:
        if self.state is ParserState.IGNORED:
            self.state = ParserState.AT_ROOT
            return
        if self.state is ParserState.AT_ROOT:
            raise self._fail("} outside a record")

        assert self._current is not None
        self.file.add_record(self._current)
        self._current = None
        self.state = ParserState.AT_ROOT

    def _add_field(self, line: str) -> None:
        assert self._current is not None
        name, sep, value = line.partition(EQUAL)
        if not sep:
            raise self._fail("= is missing")
        self._current.add_field(
            Field(
                key=trim_affixes(name, spaces_only=True),
                value=trim_affixes(value),
                line=self.line_num,
            )
        )


def parse(stream: BinaryIO, name: str, encoding: str = "utf-8") -> File:
    """Parse a binary stream into a :class:`File`.

    Args:
        stream: Any readable binary stream
        name: Display name recorded on the resulting file
        encoding: Text encoding of the stream

    Returns:
        The parsed file

    Raises:
        ParseError: On the first syntax error. The records closed so far are
            available as ``ParseError.partial``.
    """
    return Parser(stream, name, encoding).parse()


def parse_string(text: str, name: str = "<string>") -> File:
    """Parse BibTeX text held in memory."""
    return parse(io.BytesIO(text.encode("utf-8", errors="surrogateescape")), name)


def parse_file(path: str | Path, encoding: str = "utf-8") -> File:
    """Parse a .bib file from disk.

    I/O errors from opening or reading the file are not caught.
    """
    logger.debug(f"Parsing .bib file: {path}")
    with open(path, "rb") as f:
        return parse(f, str(path), encoding)
