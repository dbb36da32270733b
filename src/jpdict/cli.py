"""CLI entrypoint for loading and inspecting Japanese dictionary sources."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Mapping, Sequence

from jpdict.errors import DictionaryError
from jpdict.jmdict.models import Entry, FrequencyRank, Priority
from jpdict.jmdict.parser import load_jmdict
from jpdict.kanjidic.models import Character
from jpdict.kanjidic.parser import load_kanjidic
from jpdict.reporting.summary_md import build_jmdict_report_md, build_kanjidic_report_md
from jpdict.stats import collect_grade_counts, collect_pos_counts, collect_priority_counts
from jpdict.tatoeba.parser import load_sentences

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
TOP_COUNT_ROWS = 20
SAMPLE_SENTENCES = 5


def _resolve_default_path(filename: str) -> Path:
    """Resolve a default source path from project layout.

    Args:
        filename: Source file name such as ``JMdict_e.xml``.

    Returns:
        Preferred path, favoring ``data/<filename>`` when present and falling
        back to ``<filename>`` in the working directory.
    """

    cwd_data = Path("data") / filename
    if cwd_data.exists():
        return cwd_data
    return Path(filename)


def _format_table(headers: Sequence[str], data_rows: Sequence[Sequence[str]]) -> str:
    """Format rows as an ASCII table for terminal output.

    Args:
        headers: Table headers.
        data_rows: Row values.

    Returns:
        Monospace table string.
    """

    widths = [len(header) for header in headers]
    for row in data_rows:
        for idx, value in enumerate(row):
            widths[idx] = max(widths[idx], len(value))

    header_line = " | ".join(header.ljust(widths[idx]) for idx, header in enumerate(headers))
    separator_line = "-+-".join("-" * width for width in widths)
    body_lines = [
        " | ".join(value.ljust(widths[idx]) for idx, value in enumerate(row)) for row in data_rows
    ]
    return "\n".join([header_line, separator_line, *body_lines])


def _top_rows(counts: Mapping[str, int], limit: int = TOP_COUNT_ROWS) -> list[list[str]]:
    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [[label, str(count)] for label, count in ordered[:limit]]


def _priority_label(priority: Priority | None) -> str:
    if priority is None:
        return ""
    if isinstance(priority, FrequencyRank):
        return f"nf{priority.rank:02d}"
    return priority.value


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct CLI argument parser.

    Returns:
        Configured parser with one subcommand per dictionary source.
    """

    parser = argparse.ArgumentParser(description="Load Japanese dictionary sources into typed models.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    jmdict = subparsers.add_parser("jmdict", help="Parse a JMdict XML file.")
    jmdict.add_argument(
        "--path",
        type=Path,
        default=_resolve_default_path("JMdict_e.xml"),
        help="Path to JMdict XML file.",
    )
    jmdict.add_argument("--search", default=None, help="Print entries whose kanji or reading matches.")
    jmdict.add_argument("--report", type=Path, default=None, help="Markdown summary output path.")

    kanjidic = subparsers.add_parser("kanjidic", help="Parse a KANJIDIC2 XML file.")
    kanjidic.add_argument(
        "--path",
        type=Path,
        default=_resolve_default_path("kanjidic2.xml"),
        help="Path to kanjidic2.xml.",
    )
    kanjidic.add_argument("--literal", default=None, help="Print the record for one character.")
    kanjidic.add_argument("--report", type=Path, default=None, help="Markdown summary output path.")

    tatoeba = subparsers.add_parser("tatoeba", help="Parse a Tatoeba sentences file.")
    tatoeba.add_argument(
        "--path",
        type=Path,
        default=_resolve_default_path("sentences.csv"),
        help="Path to Tatoeba sentences.csv.",
    )
    tatoeba.add_argument(
        "--lang",
        default=None,
        help="Keep only sentences with this language code (for example jpn).",
    )
    return parser


def _print_entry(entry: Entry) -> None:
    print(f"\nent_seq {entry.seq}")
    form_rows = [
        ["kanji", form.text, _priority_label(form.priority)] for form in entry.kanji
    ] + [["reading", form.text, _priority_label(form.priority)] for form in entry.readings]
    print(_format_table(["form", "text", "priority"], form_rows))
    for idx, sense in enumerate(entry.senses, start=1):
        glosses = "; ".join(gloss.text for gloss in sense.glosses if gloss.text)
        pos = ", ".join(sense.parts_of_speech)
        print(f"  {idx}. [{pos}] {glosses}")


def _print_character(character: Character) -> None:
    print(f"\n{character.literal}  strokes={character.stroke_count}")
    rows = [
        [
            reading.reading_type.value,
            reading.pinyin_marked or reading.value,
            "yes" if reading.jouyou_approved else "",
        ]
        for reading in character.readings()
    ]
    print(_format_table(["type", "reading", "jouyou"], rows))
    meanings = ", ".join(meaning.text for meaning in character.meanings() if meaning.lang == "en")
    print(f"meanings: {meanings}")


def _run_jmdict(args: argparse.Namespace) -> int:
    dictionary = load_jmdict(args.path)
    print(f"Parsed {len(dictionary)} entries from {args.path}")

    print("\nPart-of-speech tags:")
    pos_rows = _top_rows(collect_pos_counts(dictionary.entries))
    print(_format_table(["part_of_speech", "count"], pos_rows))
    print("\nPriority ranks:")
    priority_rows = _top_rows(collect_priority_counts(dictionary.entries))
    print(_format_table(["priority", "count"], priority_rows))

    if args.search is not None:
        matches = dictionary.search(args.search)
        print(f"\n{len(matches)} entries match {args.search!r}")
        for entry in matches:
            _print_entry(entry)

    if args.report is not None:
        args.report.write_text(build_jmdict_report_md(dictionary), encoding="utf-8")
        print(f"\nWrote report to {args.report}")
    return 0


def _run_kanjidic(args: argparse.Namespace) -> int:
    dictionary = load_kanjidic(args.path)
    print(
        f"Parsed {len(dictionary)} characters from {args.path} "
        f"(file_version={dictionary.file_version}, "
        f"database_version={dictionary.database_version}, "
        f"created={dictionary.creation_date})"
    )
    print("\nCharacters by grade:")
    print(_format_table(["grade", "count"], _top_rows(collect_grade_counts(dictionary.characters))))

    if args.literal is not None:
        character = dictionary.find_literal(args.literal)
        if character is None:
            print(f"\nNo character {args.literal!r} in {args.path}")
        else:
            _print_character(character)

    if args.report is not None:
        args.report.write_text(build_kanjidic_report_md(dictionary), encoding="utf-8")
        print(f"\nWrote report to {args.report}")
    return 0


def _run_tatoeba(args: argparse.Namespace) -> int:
    wanted = args.lang

    def keep_language(language: str) -> bool:
        return wanted is None or language == wanted

    corpus = load_sentences(args.path, language_filter=keep_language)
    print(f"Parsed {len(corpus)} sentences from {args.path}")
    print(_format_table(["language", "count"], _top_rows(corpus.languages())))
    for sentence in corpus.sentences[:SAMPLE_SENTENCES]:
        print(f"  {sentence.sentence_id}\t{sentence.language}\t{sentence.content}")
    return 0


COMMANDS = {
    "jmdict": _run_jmdict,
    "kanjidic": _run_kanjidic,
    "tatoeba": _run_tatoeba,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run CLI workflow from arguments through summary output.

    Returns:
        Zero exit status on success, one when the source fails to parse.
    """

    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )

    try:
        return COMMANDS[args.command](args)
    except DictionaryError as exc:
        logger.debug("Parse of %s failed", args.path, exc_info=True)
        print(f"ERROR: {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
