"""Unit tests for counting helpers and markdown summaries."""

from __future__ import annotations

from jpdict.jmdict.models import (
    Entry,
    FrequencyRank,
    Gloss,
    JMdict,
    KanjiForm,
    PriorityRank,
    ReadingForm,
    Sense,
)
from jpdict.kanjidic.models import (
    Character,
    Codepoint,
    Grade,
    GradeCategory,
    Kanjidic,
    Radical,
    RadicalType,
)
from jpdict.reporting.summary_md import build_jmdict_report_md, build_kanjidic_report_md
from jpdict.stats import collect_grade_counts, collect_pos_counts, collect_priority_counts


def _character(literal: str, grade: Grade | None, jlpt: int | None = None) -> Character:
    return Character(
        literal=literal,
        codepoints=(Codepoint("ucs", "0"),),
        radicals=(Radical(RadicalType.CLASSICAL, 1),),
        stroke_count=1,
        grade=grade,
        old_jlpt=jlpt,
    )


def _entries() -> tuple[Entry, ...]:
    return (
        Entry(
            seq=1,
            kanji=(KanjiForm("本", PriorityRank.ICHI1),),
            readings=(ReadingForm("ほん", FrequencyRank(2)),),
            senses=(Sense(parts_of_speech=("n",), glosses=(Gloss("book"),)),),
        ),
        Entry(
            seq=2,
            readings=(ReadingForm("いい", FrequencyRank(10)),),
            senses=(Sense(parts_of_speech=("adj-ix", "n"), glosses=(Gloss("gut", lang="ger"),)),),
        ),
    )


def test_collect_counts_fold_frequency_ranks() -> None:
    entries = _entries()

    assert collect_pos_counts(entries) == {"n": 2, "adj-ix": 1}
    assert collect_priority_counts(entries) == {"ichi1": 1, "nf": 2}


def test_collect_grade_counts_labels_kyouiku_years() -> None:
    characters = [
        _character("一", Grade.kyouiku(1)),
        _character("亜", Grade(GradeCategory.JOUYOU)),
        _character("丂", None),
    ]

    assert collect_grade_counts(characters) == {"kyouiku-1": 1, "jouyou": 1, "none": 1}


def test_build_jmdict_report_md_contains_required_sections() -> None:
    markdown = build_jmdict_report_md(JMdict(entries=_entries()))

    assert "## Totals" in markdown
    assert "| entries | 2 |" in markdown
    assert "## Part-of-Speech Tags Present" in markdown
    assert "| n | 2 |" in markdown
    assert "## Priority ranks" in markdown
    assert "## Gloss languages" in markdown
    assert "| eng | 1 |" in markdown


def test_build_kanjidic_report_md_orders_grades() -> None:
    dictionary = Kanjidic(
        file_version=4,
        database_version="2024-015",
        creation_date="2024-01-15",
        characters=(
            _character("亜", Grade(GradeCategory.JOUYOU), jlpt=1),
            _character("三", Grade.kyouiku(1), jlpt=4),
            _character("本", Grade.kyouiku(1), jlpt=4),
        ),
    )

    markdown = build_kanjidic_report_md(dictionary)

    assert "| 4 | 2024-015 | 2024-01-15 | 3 |" in markdown
    assert markdown.index("| kyouiku-1 | 2 |") < markdown.index("| jouyou | 1 |")
    assert "| 4 | 2 |" in markdown
