"""
Tests for the term:definition:mistakes line format.
"""

import logging
from pathlib import Path

import pytest

from flashquiz.codec import decode_line, encode_card, read_cards, write_cards
from flashquiz.exceptions import (
    CardFileReadError,
    CardFileWriteError,
    MalformedRecordError,
)
from flashquiz.models import Card


def test_encode_card():
    card = Card(term="author", definition="Twain", mistakes=2)
    assert encode_card(card) == "author:Twain:2"


def test_decode_line():
    card = decode_line("capital:Paris:0")
    assert card == Card(term="capital", definition="Paris", mistakes=0)


def test_decode_line_allows_empty_text_fields():
    card = decode_line("::3")
    assert card.term == ""
    assert card.definition == ""
    assert card.mistakes == 3


@pytest.mark.parametrize(
    "line",
    ["capital:Paris", "capital", "", "a:b:c:1", "12:30:noon:0"],
)
def test_decode_line_wrong_field_count(line):
    with pytest.raises(MalformedRecordError, match="expected 3 fields"):
        decode_line(line)


@pytest.mark.parametrize("mistakes", ["", "two", "+1", "-1", " 1", "1.0", "1_0"])
def test_decode_line_invalid_mistake_count(mistakes):
    with pytest.raises(MalformedRecordError, match="not a non-negative integer"):
        decode_line(f"capital:Paris:{mistakes}")


def test_malformed_record_carries_position():
    with pytest.raises(MalformedRecordError) as exc_info:
        decode_line("broken", line_number=4)
    assert exc_info.value.line == "broken"
    assert exc_info.value.line_number == 4
    assert "line 4" in str(exc_info.value)


def test_read_cards_missing_file_returns_none(tmp_path, caplog):
    with caplog.at_level(logging.INFO):
        assert read_cards(tmp_path / "missing.txt") is None
    assert "does not exist" in caplog.text


def test_read_cards_empty_file(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("", encoding="utf-8")
    assert read_cards(path) == []


def test_read_cards_reports_line_number(card_file):
    path = card_file(["capital:Paris:0", "author:Twain"])
    with pytest.raises(MalformedRecordError) as exc_info:
        read_cards(path)
    assert exc_info.value.line_number == 2


def test_read_cards_blank_line_is_malformed(tmp_path):
    path = tmp_path / "cards.txt"
    path.write_text("capital:Paris:0\n\nauthor:Twain:2\n", encoding="utf-8")
    with pytest.raises(MalformedRecordError):
        read_cards(path)


def test_read_cards_without_trailing_newline(tmp_path):
    path = tmp_path / "cards.txt"
    path.write_text("capital:Paris:0\nauthor:Twain:2", encoding="utf-8")
    assert [card.term for card in read_cards(path)] == ["capital", "author"]


def test_read_cards_crlf_line_endings(tmp_path):
    path = tmp_path / "cards.txt"
    path.write_bytes(b"capital:Paris:0\r\nauthor:Twain:2\r\n")
    assert [card.term for card in read_cards(path)] == ["capital", "author"]


@pytest.mark.parametrize(
    "term", ["a\u2028b", "a\u2029b", "a\x0bb", "a\x0cb", "a\x1cb", "a\x85b"]
)
def test_unicode_line_separators_stay_inside_fields(tmp_path, term):
    path = tmp_path / "cards.txt"
    card = Card(term=term, definition="def", mistakes=1)

    write_cards(path, [card])

    assert read_cards(path) == [card]


def test_read_cards_directory_is_read_error(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        with pytest.raises(CardFileReadError) as exc_info:
            read_cards(tmp_path)
    assert isinstance(exc_info.value.original_exception, OSError)
    assert "Could not read card file" in caplog.text


def test_read_cards_non_utf8_is_read_error(tmp_path):
    path = tmp_path / "latin1.txt"
    path.write_bytes("café:coffee:0\n".encode("latin-1"))

    with pytest.raises(CardFileReadError) as exc_info:
        read_cards(path)
    assert isinstance(exc_info.value.original_exception, UnicodeDecodeError)


def test_write_cards_writes_one_line_per_card(tmp_path):
    path = tmp_path / "out.txt"
    cards = [
        Card(term="capital", definition="Paris", mistakes=0),
        Card(term="author", definition="Twain", mistakes=2),
    ]

    assert write_cards(path, cards) == 2
    assert path.read_text(encoding="utf-8").splitlines() == [
        "capital:Paris:0",
        "author:Twain:2",
    ]


def test_write_cards_overwrites_existing_file(card_file):
    path = card_file(["old:card:9", "other:card:1"])
    write_cards(path, [Card(term="new", definition="card")])
    assert path.read_text(encoding="utf-8") == "new:card:0\n"


def test_write_cards_keeps_unicode(tmp_path):
    path = tmp_path / "out.txt"
    write_cards(path, [Card(term="Straße", definition="street", mistakes=1)])
    assert read_cards(path) == [Card(term="Straße", definition="street", mistakes=1)]


def test_write_cards_error(tmp_path, mocker, caplog):
    mocker.patch(
        "flashquiz.codec.open",
        side_effect=PermissionError("read-only"),
        create=True,
    )
    with caplog.at_level(logging.ERROR):
        with pytest.raises(CardFileWriteError, match="read-only") as exc_info:
            write_cards(tmp_path / "out.txt", [Card(term="a", definition="b")])
    assert isinstance(exc_info.value.original_exception, PermissionError)
    assert "Could not write card file" in caplog.text


def test_colon_in_term_cannot_be_read_back(tmp_path):
    """Colons are not escaped, so such a card is written but fails to decode."""
    path = tmp_path / "out.txt"
    write_cards(path, [Card(term="ratio 1:2", definition="half")])
    assert path.read_text(encoding="utf-8") == "ratio 1:2:half:0\n"
    with pytest.raises(MalformedRecordError):
        read_cards(path)
