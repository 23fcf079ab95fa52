"""Tests for citation key generation and repair."""

from itertools import islice

import pytest

from bibset.dedup import valid_keys
from bibset.exceptions import EmptyInputError
from bibset.keys import extract_lastname, fields_cite_key, fix_keys, new_cite_key, suffix_letters
from bibset.model import Field, File, Record
from bibset.parser import parse_string
from bibset.writer import write_string


def _article(key: str = "", **fields: str) -> Record:
    return Record(
        type="article",
        key=key,
        fields=[Field(name, value) for name, value in fields.items()],
    )


def test_extract_lastname() -> None:
    assert extract_lastname("Fu, Yongping and Zhu, Haiming") == "fu"
    assert extract_lastname("Mahmud S") == "mahmud"
    assert extract_lastname("") == ""


def test_new_cite_key() -> None:
    record = _article(
        author="Fu, Yongping",
        year="2019",
        title="Metal halide perovskite nanostructures",
        pages="169-188",
        volume="4",
    )
    assert new_cite_key(record) == "fu2019metala169-1884"


def test_new_cite_key_without_type() -> None:
    record = Record(type="", fields=[Field("author", "Anonymous"), Field("title", "Drug")])
    assert new_cite_key(record) == "anonymousdrugx"


def test_new_cite_key_survives_round_trip() -> None:
    record = Record(type="misc", fields=[Field("title", "{Metal} halide")])
    record.key = new_cite_key(record)

    assert record.key == "metalm"
    assert parse_string(write_string(record)).records[0].key == record.key
    assert extract_lastname("{World Health Organization}") == "world"
    assert extract_lastname("{Fu}, Yongping") == "fu"


def test_fields_cite_key() -> None:
    record = _article(year="2013", title="Epidemiology of Colorectal Carcinoma")
    assert fields_cite_key(record, ["year", "title"]) == "2013epidemiologyofcolorectalcarcinoma"


def test_suffix_letters() -> None:
    suffixes = list(islice(suffix_letters(), 28 + 26 * 26))

    assert suffixes[:3] == ["A", "B", "C"]
    assert suffixes[25:28] == ["Z", "AA", "AB"]
    assert suffixes[26 + 26 * 26 - 1] == "ZZ"
    assert suffixes[26 + 26 * 26] == "AAA"
    assert len(set(suffixes)) == len(suffixes)


def test_fix_keys_fills_missing_and_disambiguates() -> None:
    fields = {"author": "Mahmud, S", "year": "2017", "title": "Causal Diagrams"}
    records = [_article(**fields), _article(**fields), _article(key="kept", **fields)]
    file = File(name="cv.bib", records=list(records))

    report = fix_keys(file)

    assert report.duplicate_set_count == 1
    assert [record.key for record in file.records] == [
        "mahmud2017causala",
        "mahmud2017causalaA",
        "kept",
    ]
    # Records are re-keyed in place
    assert file.records[0] is records[0]
    assert valid_keys(file)


def test_fix_keys_overwrite_with_fields() -> None:
    file = File(
        name="f",
        records=[
            _article(key="old1", year="2018", title="Same Title"),
            _article(key="old2", year="2018", title="Same title!"),
            _article(key="old3", year="2019", title="Other"),
        ],
    )

    fix_keys(file, ["year", "title"], overwrite=True)

    assert [record.key for record in file.records] == [
        "2018sametitle",
        "2018sametitleA",
        "2019other",
    ]


def test_fix_keys_skips_suffixes_in_use() -> None:
    file = File(
        name="f",
        records=[_article(key="smith"), _article(key="smith"), _article(key="smithA")],
    )

    fix_keys(file)

    assert [record.key for record in file.records] == ["smith", "smithB", "smithA"]


def test_fix_keys_many_collisions() -> None:
    file = File(name="f", records=[_article(key="dup") for _ in range(30)])

    fix_keys(file)

    keys = [record.key for record in file.records]
    assert keys[0] == "dup"
    assert keys[26] == "dupZ"
    assert keys[27:] == ["dupAA", "dupAB", "dupAC"]
    assert valid_keys(file)


def test_fix_keys_without_duplicates() -> None:
    file = File(name="f", records=[_article(key="a"), _article(key="b")])

    report = fix_keys(file)

    assert report.duplicate_set_count == 0
    assert [record.key for record in file.records] == ["a", "b"]


def test_fix_keys_empty_file() -> None:
    with pytest.raises(EmptyInputError):
        fix_keys(File(name="empty"))
