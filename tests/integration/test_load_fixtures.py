"""Integration tests loading complete fixture documents from disk."""

from __future__ import annotations

from pathlib import Path

from lxml import etree

from jpdict import load_japanese_sentences, load_jmdict, load_kanjidic
from jpdict.jmdict.models import FrequencyRank, Gloss, LoanSource, PriorityRank
from jpdict.kanjidic.models import (
    DictionaryReference,
    DictionarySystem,
    Grade,
    GradeCategory,
    OnType,
    ReadingType,
)

FIXTURES = Path(__file__).resolve().parents[1] / "fixtures"


def test_jmdict_fixture_entries_match_source_elements() -> None:
    path = FIXTURES / "mini_jmdict.xml"
    source_root = etree.parse(str(path)).getroot()
    source_seqs = [int(entry.findtext("ent_seq")) for entry in source_root.iter("entry")]

    dictionary = load_jmdict(path)

    assert len(dictionary.entries) == len(source_seqs)
    assert [entry.seq for entry in dictionary.entries] == source_seqs


def test_jmdict_fixture_resolves_entities_priorities_and_languages() -> None:
    dictionary = load_jmdict(FIXTURES / "mini_jmdict.xml")

    book = dictionary.find_seq(1582710)
    assert book is not None
    assert book.kanji[0].priority is PriorityRank.ICHI1
    assert book.readings[0].priority == FrequencyRank(2)
    assert book.senses[0].parts_of_speech == ("noun (common) (futsuumeishi)",)
    assert book.senses[0].glosses[2] == Gloss("Buch", lang="ger")

    arbeit = dictionary.search("アルバイト")[0]
    assert arbeit.readings[0].priority is PriorityRank.GAI1
    assert arbeit.senses[0].loan_sources == (LoanSource("Arbeit", lang="ger"),)

    bad = dictionary.search("悪い")[0]
    assert bad.readings[0].priority is None
    assert [entry.seq for entry in dictionary.antonyms(bad)] == [1605820]
    assert [entry.seq for entry in dictionary.filter_gloss(lambda g: g.text == "book")] == [1582710]


def test_kanjidic_fixture_loads_header_and_characters() -> None:
    dictionary = load_kanjidic(FIXTURES / "mini_kanjidic2.xml")

    assert dictionary.file_version == 4
    assert dictionary.database_version == "2024-015"
    assert [character.literal for character in dictionary.characters] == ["本", "亜", "丂"]

    hon = dictionary.find_literal("本")
    assert hon is not None
    assert hon.grade == Grade(GradeCategory.KYOUIKU, 1)
    assert hon.old_jlpt == 4
    assert hon.dictionary_refs[-1] == DictionaryReference(
        DictionarySystem.MOROHASHI, "14421", volume=6, page=1
    )
    assert [reading.reading_type for reading in hon.readings()] == [
        ReadingType.PINYIN,
        ReadingType.KOREAN_H,
        ReadingType.JA_ON,
        ReadingType.JA_KUN,
    ]
    assert hon.nanori == ("まと",)

    a = dictionary.find_literal("亜")
    assert a is not None
    assert a.grade == Grade(GradeCategory.JOUYOU)
    assert (a.stroke_count, a.stroke_miscounts) == (7, (8,))
    assert a.dictionary_refs == (DictionaryReference(DictionarySystem.MOROHASHI, "272"),)
    assert a.readings()[0].on_type is OnType.KAN

    bare = dictionary.find_literal("丂")
    assert bare is not None
    assert bare.reading_meanings == ()
    assert bare.grade is None
    assert [c.literal for c in dictionary.filter_meaning(lambda m: m.lang == "fr")] == ["本"]


def test_tatoeba_fixture_keeps_only_japanese() -> None:
    corpus = load_japanese_sentences(FIXTURES / "mini_sentences.csv")

    assert [sentence.content for sentence in corpus.sentences] == ["こんにちは", "本を読む。"]
