"""Typed records and closed value sets for the KANJIDIC2 character database."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Callable

from pypinyin.contrib.tone_convert import to_tone

from jpdict.errors import InvalidEnumError
from jpdict.values import require_token

DEFAULT_MEANING_LANG = "en"


class RadicalType(Enum):
    CLASSICAL = "classical"
    NELSON_C = "nelson_c"


class ReadingType(Enum):
    PINYIN = "pinyin"
    KOREAN_R = "korean_r"
    KOREAN_H = "korean_h"
    VIETNAM = "vietnam"
    JA_ON = "ja_on"
    JA_KUN = "ja_kun"


class OnType(Enum):
    """Historical origin of an on-reading; ``NONE`` when the source is silent."""

    KAN = "kan"
    GO = "go"
    TOU = "tou"
    KANYOU = "kan'you"
    NONE = "none"


class DictionarySystem(Enum):
    """Paper dictionaries and study books referenced by ``dic_ref``."""

    NELSON_C = "nelson_c"
    NELSON_N = "nelson_n"
    HALPERN_NJECD = "halpern_njecd"
    HALPERN_KKD = "halpern_kkd"
    HALPERN_KKLD = "halpern_kkld"
    HALPERN_KKLD_2ED = "halpern_kkld_2ed"
    HEISIG = "heisig"
    HEISIG6 = "heisig6"
    GAKKEN = "gakken"
    ONEILL_NAMES = "oneill_names"
    ONEILL_KK = "oneill_kk"
    MOROHASHI = "moro"
    HENSHALL = "henshall"
    SH_KK = "sh_kk"
    SH_KK2 = "sh_kk2"
    SAKADE = "sakade"
    JF_CARDS = "jf_cards"
    HENSHALL3 = "henshall3"
    TUTT_CARDS = "tutt_cards"
    CROWLEY = "crowley"
    KANJI_IN_CONTEXT = "kanji_in_context"
    BUSY_PEOPLE = "busy_people"
    KODANSHA_COMPACT = "kodansha_compact"
    MANIETTE = "maniette"


class GradeCategory(Enum):
    KYOUIKU = "kyouiku"
    JOUYOU = "jouyou"
    JINMEIYOU = "jinmeiyou"
    JOUYOU_VARIANT = "jouyou_variant"


RADICAL_TYPES: dict[str, RadicalType] = {item.value: item for item in RadicalType}
READING_TYPES: dict[str, ReadingType] = {item.value: item for item in ReadingType}
ON_TYPES: dict[str, OnType] = {item.value: item for item in OnType if item is not OnType.NONE}
DICTIONARY_SYSTEMS: dict[str, DictionarySystem] = {item.value: item for item in DictionarySystem}

KYOUIKU_YEARS = range(1, 7)
GRADE_CATEGORIES: dict[int, GradeCategory] = {
    8: GradeCategory.JOUYOU,
    9: GradeCategory.JINMEIYOU,
    10: GradeCategory.JOUYOU_VARIANT,
}
GRADE_CODES = tuple(str(code) for code in [*KYOUIKU_YEARS, *GRADE_CATEGORIES])


@dataclass(frozen=True)
class Grade:
    """School grade classification of a kanji.

    ``year`` is set only for ``KYOUIKU`` grades (taught in elementary school
    years 1 to 6).
    """

    category: GradeCategory
    year: int | None = None

    @classmethod
    def kyouiku(cls, year: int) -> Grade:
        return cls(GradeCategory.KYOUIKU, year)


def parse_grade(code: int) -> Grade:
    """Map a numeric ``grade`` code to a :class:`Grade`.

    Codes 1-6 are Kyouiku years, 8/9/10 are Jouyou, Jinmeiyou and Jouyou
    variants.

    Raises:
        InvalidEnumError: For any other code.
    """

    if code in KYOUIKU_YEARS:
        return Grade.kyouiku(code)
    category = GRADE_CATEGORIES.get(code)
    if category is None:
        raise InvalidEnumError(str(code), GRADE_CODES)
    return Grade(category)


def parse_radical_type(token: str) -> RadicalType:
    return require_token(token, RADICAL_TYPES)


def parse_reading_type(token: str) -> ReadingType:
    return require_token(token, READING_TYPES)


def parse_on_type(token: str) -> OnType:
    return require_token(token, ON_TYPES)


def parse_dictionary_system(token: str) -> DictionarySystem:
    return require_token(token, DICTIONARY_SYSTEMS)


@dataclass(frozen=True)
class Codepoint:
    standard: str
    value: str


@dataclass(frozen=True)
class Radical:
    classification: RadicalType
    value: int


@dataclass(frozen=True)
class Reading:
    """One reading of a character.

    ``jouyou_approved`` reflects the presence of ``r_status`` on Japanese
    readings. ``on_type`` is only set for ``ja_on`` readings.
    """

    value: str
    reading_type: ReadingType
    jouyou_approved: bool = False
    on_type: OnType | None = None

    @property
    def pinyin_marked(self) -> str | None:
        """Tone-marked form of a tone-numbered pinyin reading (``hao3`` -> ``hǎo``)."""

        if self.reading_type is not ReadingType.PINYIN:
            return None
        normalized = self.value.replace("u:", "ü").replace("U:", "ü").lower()
        return to_tone(normalized)


@dataclass(frozen=True)
class Meaning:
    text: str
    lang: str = DEFAULT_MEANING_LANG


@dataclass(frozen=True)
class ReadingMeaningGroup:
    readings: tuple[Reading, ...] = ()
    meanings: tuple[Meaning, ...] = ()


@dataclass(frozen=True)
class DictionaryReference:
    """Index of a character in an external dictionary.

    ``volume`` and ``page`` are only populated for Morohashi references, and
    only when the source carries ``m_vol`` / ``m_page``.
    """

    system: DictionarySystem
    code: str
    volume: int | None = None
    page: int | None = None


@dataclass(frozen=True)
class Misc:
    """Contents of the ``misc`` block before they are folded into a character."""

    stroke_count: int
    stroke_miscounts: tuple[int, ...] = ()
    grade: Grade | None = None
    frequency: int | None = None
    old_jlpt: int | None = None


@dataclass(frozen=True)
class Character:
    """Full database record for one kanji.

    The first ``stroke_count`` in the source is canonical; later values are
    accepted miscounts.
    """

    literal: str
    codepoints: tuple[Codepoint, ...]
    radicals: tuple[Radical, ...]
    stroke_count: int
    stroke_miscounts: tuple[int, ...] = ()
    grade: Grade | None = None
    frequency: int | None = None
    old_jlpt: int | None = None
    dictionary_refs: tuple[DictionaryReference, ...] = ()
    reading_meanings: tuple[ReadingMeaningGroup, ...] = ()
    nanori: tuple[str, ...] = ()

    def readings(self) -> list[Reading]:
        return [reading for group in self.reading_meanings for reading in group.readings]

    def meanings(self) -> list[Meaning]:
        return [meaning for group in self.reading_meanings for meaning in group.meanings]


@dataclass(frozen=True)
class Kanjidic:
    """Parsed character database plus its header metadata."""

    file_version: int
    database_version: str
    creation_date: str
    characters: tuple[Character, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.characters)

    @cached_property
    def characters_by_literal(self) -> dict[str, Character]:
        mapping: dict[str, Character] = {}
        for character in self.characters:
            mapping.setdefault(character.literal, character)
        return mapping

    def find_literal(self, literal: str) -> Character | None:
        return self.characters_by_literal.get(literal)

    def filter(self, predicate: Callable[[Character], bool]) -> list[Character]:
        return [character for character in self.characters if predicate(character)]

    def filter_meaning(self, predicate: Callable[[Meaning], bool]) -> list[Character]:
        return self.filter(lambda character: any(predicate(m) for m in character.meanings()))

    def filter_reading(self, predicate: Callable[[Reading], bool]) -> list[Character]:
        return self.filter(lambda character: any(predicate(r) for r in character.readings()))
