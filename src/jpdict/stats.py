"""Counting helpers used by the CLI tables and markdown summaries."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from jpdict.jmdict.models import Entry, FrequencyRank
from jpdict.kanjidic.models import Character, GradeCategory

FREQUENCY_LABEL = "nf"


def collect_pos_counts(entries: Sequence[Entry]) -> dict[str, int]:
    """Count part-of-speech tags across every sense.

    Args:
        entries: Parsed JMdict entries.

    Returns:
        Dictionary of POS tag text to count.
    """

    counter: Counter[str] = Counter()
    for entry in entries:
        for sense in entry.senses:
            counter.update(sense.parts_of_speech)
    return dict(counter)


def collect_priority_counts(entries: Sequence[Entry]) -> dict[str, int]:
    """Count priority ranks on kanji and reading forms.

    All ``nfNN`` ranks are folded into a single ``nf`` bucket.

    Args:
        entries: Parsed JMdict entries.

    Returns:
        Dictionary of rank label to number of forms carrying it.
    """

    counter: Counter[str] = Counter()
    for entry in entries:
        for form in (*entry.kanji, *entry.readings):
            if form.priority is None:
                continue
            if isinstance(form.priority, FrequencyRank):
                counter[FREQUENCY_LABEL] += 1
            else:
                counter[form.priority.value] += 1
    return dict(counter)


def collect_gloss_language_counts(entries: Sequence[Entry]) -> dict[str, int]:
    counter: Counter[str] = Counter()
    for entry in entries:
        for sense in entry.senses:
            counter.update(gloss.lang for gloss in sense.glosses)
    return dict(counter)


def grade_label(character: Character) -> str:
    """Render a character's grade as ``kyouiku-3``, ``jouyou`` or ``none``."""

    if character.grade is None:
        return "none"
    if character.grade.category is GradeCategory.KYOUIKU:
        return f"{character.grade.category.value}-{character.grade.year}"
    return character.grade.category.value


def collect_grade_counts(characters: Sequence[Character]) -> dict[str, int]:
    return dict(Counter(grade_label(character) for character in characters))


def collect_jlpt_counts(characters: Sequence[Character]) -> dict[str, int]:
    """Count characters by legacy JLPT level, skipping those without one."""

    levels = (character.old_jlpt for character in characters if character.old_jlpt is not None)
    return dict(Counter(str(level) for level in levels))

