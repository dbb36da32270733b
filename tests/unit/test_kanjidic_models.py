"""Unit tests for KANJIDIC2 value parsers and derived fields."""

from __future__ import annotations

import pytest

from jpdict.errors import InvalidEnumError
from jpdict.kanjidic.models import (
    DictionarySystem,
    Grade,
    GradeCategory,
    OnType,
    RadicalType,
    Reading,
    ReadingType,
    parse_dictionary_system,
    parse_grade,
    parse_on_type,
    parse_radical_type,
    parse_reading_type,
)


@pytest.mark.parametrize("code", [1, 2, 3, 4, 5, 6])
def test_kyouiku_grades_carry_their_year(code: int) -> None:
    assert parse_grade(code) == Grade(GradeCategory.KYOUIKU, code)


def test_named_grade_codes() -> None:
    assert parse_grade(3) == Grade.kyouiku(3)
    assert parse_grade(8) == Grade(GradeCategory.JOUYOU)
    assert parse_grade(9) == Grade(GradeCategory.JINMEIYOU)
    assert parse_grade(10) == Grade(GradeCategory.JOUYOU_VARIANT)


@pytest.mark.parametrize("code", [0, 7, 11, -1])
def test_other_grade_codes_are_rejected_with_accepted_set(code: int) -> None:
    with pytest.raises(InvalidEnumError) as excinfo:
        parse_grade(code)

    assert excinfo.value.value == str(code)
    assert excinfo.value.valids == ("1", "2", "3", "4", "5", "6", "8", "9", "10")


def test_closed_switches_accept_source_tokens() -> None:
    assert parse_radical_type("nelson_c") is RadicalType.NELSON_C
    assert parse_reading_type("korean_r") is ReadingType.KOREAN_R
    assert parse_on_type("kan'you") is OnType.KANYOU
    assert parse_dictionary_system("moro") is DictionarySystem.MOROHASHI
    assert parse_dictionary_system("halpern_kkld_2ed") is DictionarySystem.HALPERN_KKLD_2ED


def test_closed_switches_reject_unknown_tokens() -> None:
    with pytest.raises(InvalidEnumError, match=r"\[classical, nelson_c\]"):
        parse_radical_type("Classical")
    with pytest.raises(InvalidEnumError, match="ja_kun"):
        parse_reading_type("ja_nanori")
    with pytest.raises(InvalidEnumError) as excinfo:
        parse_on_type("none")
    assert excinfo.value.valids == ("kan", "go", "tou", "kan'you")
    with pytest.raises(InvalidEnumError):
        parse_dictionary_system("unknown_book")


def test_pinyin_marked_converts_tone_numbers() -> None:
    assert Reading("ben3", ReadingType.PINYIN).pinyin_marked == "běn"
    assert Reading("hao3", ReadingType.PINYIN).pinyin_marked == "hǎo"
    assert Reading("ホン", ReadingType.JA_ON).pinyin_marked is None
