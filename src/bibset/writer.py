"""Serialize the document model back to BibTeX text."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import TextIO

from .model import Field, File, Node, Record

logger = logging.getLogger(__name__)


def dump(node: File | Node, stream: TextIO) -> None:
    """Write ``node`` to ``stream`` in the grammar the parser reads.

    Every field value is wrapped in a single pair of braces and followed by a
    comma, so re-parsing the output yields the same records and fields.
    """
    if isinstance(node, File):
        for rec in node.records:
            dump(rec, stream)
    elif isinstance(node, Record):
        stream.write(node.bibtex_repr())
        for fld in node.fields:
            dump(fld, stream)
            stream.write(",\n")
        stream.write("}\n")
    elif isinstance(node, Field):
        stream.write(node.bibtex_repr())
    else:
        raise TypeError(f"Unknown node type: {type(node).__name__}")


def write_string(node: File | Node) -> str:
    buffer = io.StringIO()
    dump(node, buffer)
    return buffer.getvalue()


def write_file(file: File, path: str | Path) -> None:
    """Write ``file`` to ``path`` as UTF-8. Undecodable input bytes are written back unchanged."""
    with open(path, "w", encoding="utf-8", errors="surrogateescape") as f:
        dump(file, f)
    logger.info(f"Wrote {file.record_count()} records to {path}")
