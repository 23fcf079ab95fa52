"""Token trimming and fingerprint folding helpers."""

from __future__ import annotations

_OPENERS = ("{", '"')
_CLOSERS = ("}", '"')


def trim_affixes(raw: bytes | str, spaces_only: bool = False) -> str:
    """Strip whitespace and one layer of delimiters from a raw token.

    From the front: leading whitespace, then at most one ``{`` or ``"``.
    From the back: trailing whitespace, then at most one ``,``, then at most
    one ``}`` or ``"``. Inner whitespace exposed by removing a delimiter is
    stripped as well. Nested delimiters are left alone.

    Args:
        raw: Token as read from the input line
        spaces_only: If True, only whitespace is removed

    Returns:
        The trimmed text
    """
    text = raw.decode("utf-8", errors="surrogateescape") if isinstance(raw, bytes) else raw
    text = text.strip()
    if spaces_only or not text:
        return text

    if text.endswith(","):
        text = text[:-1].rstrip()
    if text.startswith(_OPENERS):
        text = text[1:]
    if text.endswith(_CLOSERS):
        text = text[:-1]
    return text.strip()


def only_ascii_alphanumeric(text: str) -> str:
    """Lower-case ``text`` and drop everything but ASCII letters and digits."""
    return "".join(ch.lower() for ch in text if ch.isascii() and ch.isalnum())
