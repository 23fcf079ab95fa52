"""Tests for token trimming and fingerprint folding."""

import pytest

from bibset.text import only_ascii_alphanumeric, trim_affixes


@pytest.mark.parametrize(
    ("raw", "expected", "spaces_only"),
    [
        ('"test name"', "test name", False),
        (' {"test1"}', '"test1"', False),
        (' {"test2"},', '"test2"', False),
        ("FuMetalhalideperovskite2019,", "FuMetalhalideperovskite2019", False),
        ("{}", "", False),
        ("{},", "", False),
        ('"  {}""', '{}"', False),
        ("", "", False),
        (' {"spaces"}\t', '{"spaces"}', True),
        ("  {Springer {LLC}},  ", "Springer {LLC}", False),
        ("{{nested}}", "{nested}", False),
    ],
)
def test_trim_affixes(raw: str, expected: str, spaces_only: bool) -> None:
    """Only one layer of delimiters is removed from each end."""
    assert trim_affixes(raw, spaces_only) == expected
    assert trim_affixes(raw.encode("utf-8"), spaces_only) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("[test   name\t\n", "testname"),
        ("[test123   :Name\t\n", "test123name"),
        ("", ""),
        ("  ", ""),
        ("Müller, Hans", "mllerhans"),
    ],
)
def test_only_ascii_alphanumeric(text: str, expected: str) -> None:
    assert only_ascii_alphanumeric(text) == expected
