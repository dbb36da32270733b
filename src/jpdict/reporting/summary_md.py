"""Markdown summaries for parsed dictionaries."""

from __future__ import annotations

import re
from typing import Iterable, Mapping, Sequence

from jpdict.jmdict.models import JMdict
from jpdict.kanjidic.models import Kanjidic
from jpdict.stats import (
    collect_gloss_language_counts,
    collect_grade_counts,
    collect_jlpt_counts,
    collect_pos_counts,
    collect_priority_counts,
)


def _grade_sort_key(label: str) -> tuple[int, str]:
    """Sort grade labels so ``kyouiku-N`` years come first in numeric order.

    Args:
        label: Grade label such as ``kyouiku-3`` or ``jouyou``.

    Returns:
        Tuple suitable for stable sorting.
    """

    match = re.search(r"-(\d+)$", label)
    leading = int(match.group(1)) if match else 10**9
    return leading, label


def _markdown_table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Render a deterministic GitHub-flavored markdown table.

    Args:
        headers: Table header labels.
        rows: Table body rows as string sequences.

    Returns:
        Markdown table text.
    """

    line_header = "| " + " | ".join(headers) + " |"
    line_sep = "| " + " | ".join("---" for _ in headers) + " |"
    body = ["| " + " | ".join(row) + " |" for row in rows]
    return "\n".join([line_header, line_sep, *body])


def _count_rows(counts: Mapping[str, int]) -> list[tuple[str, str]]:
    """Order counts by descending frequency, then label."""

    return [
        (label, str(counts[label]))
        for label in sorted(counts, key=lambda item: (-counts[item], item))
    ]


def build_jmdict_report_md(dictionary: JMdict) -> str:
    """Build the markdown summary for one parsed JMdict document.

    Args:
        dictionary: Parsed lexicon.

    Returns:
        Full markdown content with summary tables.
    """

    entries = dictionary.entries
    totals = [
        ("entries", str(len(entries))),
        ("kanji_forms", str(sum(len(entry.kanji) for entry in entries))),
        ("reading_forms", str(sum(len(entry.readings) for entry in entries))),
        ("senses", str(sum(len(entry.senses) for entry in entries))),
    ]

    sections = [
        "# JMdict Summary",
        "",
        "## Totals",
        _markdown_table(["record", "count"], totals),
        "",
        "## Part-of-Speech Tags Present",
        _markdown_table(["part_of_speech", "count"], _count_rows(collect_pos_counts(entries))),
        "",
        "## Priority ranks",
        _markdown_table(["priority", "form_count"], _count_rows(collect_priority_counts(entries))),
        "",
        "## Gloss languages",
        _markdown_table(
            ["lang", "gloss_count"], _count_rows(collect_gloss_language_counts(entries))
        ),
    ]

    return "\n".join(sections) + "\n"


def build_kanjidic_report_md(dictionary: Kanjidic) -> str:
    """Build the markdown summary for one parsed KANJIDIC2 document.

    Args:
        dictionary: Parsed character database.

    Returns:
        Full markdown content with header metadata and summary tables.
    """

    characters = dictionary.characters
    grade_counts = collect_grade_counts(characters)
    grade_rows = [
        (label, str(grade_counts[label])) for label in sorted(grade_counts, key=_grade_sort_key)
    ]
    jlpt_counts = collect_jlpt_counts(characters)
    jlpt_rows = [(level, str(jlpt_counts[level])) for level in sorted(jlpt_counts)]

    sections = [
        "# KANJIDIC2 Summary",
        "",
        "## Header",
        _markdown_table(
            ["file_version", "database_version", "date_of_creation", "characters"],
            [
                (
                    str(dictionary.file_version),
                    dictionary.database_version,
                    dictionary.creation_date,
                    str(len(characters)),
                )
            ],
        ),
        "",
        "## Characters per grade",
        _markdown_table(["grade", "character_count"], grade_rows),
        "",
        "## Characters per legacy JLPT level",
        _markdown_table(["jlpt", "character_count"], jlpt_rows),
    ]

    return "\n".join(sections) + "\n"
