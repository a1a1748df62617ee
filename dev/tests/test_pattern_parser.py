from __future__ import annotations

import pytest

from qatch.exceptions import InvalidHexPairError, OddLengthError, TooShortError
from qatch.patching.pattern import (
    MIN_PATTERN_LENGTH,
    ByteSlot,
    Pattern,
    clean_pattern,
    format_pattern,
    parse_pattern,
)
from qatch.utils.result import Err, Ok, error_of, is_err, is_ok, unwrap


def test_parse_concrete_pattern() -> None:
    result = parse_pattern("41 42 FF")
    assert isinstance(result, Ok)
    assert result.value.slots == (ByteSlot(0x41), ByteSlot(0x42), ByteSlot(0xFF))
    assert result.value.source == "41 42 FF"


def test_parse_wildcards() -> None:
    pattern = unwrap(parse_pattern("41??43"))
    assert [slot.is_wildcard for slot in pattern] == [False, True, False]
    assert pattern[1] == ByteSlot.wildcard()
    assert pattern.wildcard_count == 1
    assert not pattern.is_concrete


@pytest.mark.parametrize("raw", ["de:ad:be:ef", "DE-AD-BE-EF", "de ad\tbe\nef"])
def test_separators_are_ignored(raw: str) -> None:
    pattern = unwrap(parse_pattern(raw))
    assert pattern == Pattern.from_bytes(b"\xde\xad\xbe\xef")


def test_clean_pattern_keeps_only_hex_and_question_marks() -> None:
    assert clean_pattern("4g1 ?? zz43") == "41??43"
    assert clean_pattern(None) == ""


def test_odd_length_rejected() -> None:
    result = parse_pattern("414")
    assert isinstance(result, Err)
    assert isinstance(result.error, OddLengthError)
    assert result.error.error_code == "ODD_LENGTH"
    assert result.error.details["length"] == 3


@pytest.mark.parametrize("raw, pair", [("4?", "4?"), ("41?A", "?A"), ("41 ?? ?4", "?4")])
def test_mixed_wildcard_pair_rejected(raw: str, pair: str) -> None:
    result = parse_pattern(raw)
    assert is_err(result)
    assert isinstance(result.error, InvalidHexPairError)
    assert result.error.pair == pair


@pytest.mark.parametrize("raw", ["", "41", "??", "  :  "])
def test_too_short_rejected(raw: str) -> None:
    result = parse_pattern(raw)
    assert isinstance(result, Err)
    assert isinstance(result.error, TooShortError)
    assert result.error.details["minimum"] == MIN_PATTERN_LENGTH


def test_none_is_treated_as_empty() -> None:
    result = parse_pattern(None)
    assert isinstance(result, Err)
    assert isinstance(result.error, TooShortError)


def test_lowercase_hex_accepted() -> None:
    assert unwrap(parse_pattern("abcd")) == Pattern.from_bytes(b"\xab\xcd")


@pytest.mark.parametrize(
    "data",
    [
        b"\x00\x00",
        b"\xff\xff",
        b"\x00\xff",
        bytes(range(0, 256, 17)),
        bytes(range(256)),
        bytes(range(255, -1, -1)) * 2,
    ],
)
def test_format_round_trip(data) -> None:
    pattern = Pattern.from_bytes(data)
    text = format_pattern(pattern)
    assert len(text.split()) == len(data)
    assert unwrap(parse_pattern(text)) == pattern
    assert bytes(slot.value for slot in unwrap(parse_pattern(text))) == data


def test_format_renders_upper_case() -> None:
    text = format_pattern(Pattern.from_bytes(bytes(range(0, 256, 17))))
    assert text.startswith("00 11 22")
    assert text.endswith("DD EE FF")


def test_format_wildcards() -> None:
    pattern = unwrap(parse_pattern("0a??ff"))
    assert format_pattern(pattern) == "0A ?? FF"
    assert str(pattern) == "0A ?? FF"
    assert unwrap(parse_pattern(str(pattern))) == pattern


def test_source_does_not_affect_equality() -> None:
    assert unwrap(parse_pattern("41 42")) == unwrap(parse_pattern("4142"))


def test_result_helpers() -> None:
    good = parse_pattern("4142")
    bad = parse_pattern("41")
    assert is_ok(good) and not is_ok(bad)
    assert error_of(good) is None
    assert isinstance(error_of(bad), TooShortError)
    with pytest.raises(TooShortError):
        unwrap(bad)
