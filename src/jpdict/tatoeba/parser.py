"""Parsing utilities for the Tatoeba tab-delimited sentence corpus."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Callable, Iterable

from jpdict.errors import MissingFieldError, SourceError

logger = logging.getLogger(__name__)

FIELD_DELIMITER = "\t"
JAPANESE = "jpn"

LanguageFilter = Callable[[str], bool]


@dataclass(frozen=True)
class Sentence:
    """One corpus sentence; the id column is kept verbatim."""

    sentence_id: str
    language: str
    content: str


@dataclass(frozen=True)
class Tatoeba:
    sentences: tuple[Sentence, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.sentences)

    def filter(self, predicate: Callable[[Sentence], bool]) -> list[Sentence]:
        return [sentence for sentence in self.sentences if predicate(sentence)]

    def languages(self) -> dict[str, int]:
        """Count sentences per language code."""

        return dict(Counter(sentence.language for sentence in self.sentences))


def _strip_terminator(line: str) -> str:
    """Drop one trailing LF or CRLF terminator; any other CR is sentence content."""

    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def parse_sentence_lines(
    lines: Iterable[str],
    language_filter: LanguageFilter | None = None,
) -> Tatoeba:
    """Parse ``id<TAB>lang<TAB>content`` lines into sentences.

    Each line is split into at most three fields, so tabs inside the content
    are preserved. Lines whose language fails ``language_filter`` are skipped
    before the content field is required. Any other short line aborts the
    whole read.

    Args:
        lines: Raw lines, with or without trailing newlines.
        language_filter: Optional predicate on the language code.

    Returns:
        Parsed corpus in source order.

    Raises:
        MissingFieldError: If a line lacks the language field, or lacks the
            content field while passing the filter.
    """

    sentences: list[Sentence] = []
    for line_number, line in enumerate(lines, start=1):
        parts = _strip_terminator(line).split(FIELD_DELIMITER, 2)
        if len(parts) < 2:
            raise MissingFieldError("sentence language", line_number)
        language = parts[1]
        if language_filter is not None and not language_filter(language):
            continue
        if len(parts) < 3:
            raise MissingFieldError("sentence", line_number)
        sentences.append(Sentence(sentence_id=parts[0], language=language, content=parts[2]))
    return Tatoeba(sentences=tuple(sentences))


def load_sentences(path: Path, language_filter: LanguageFilter | None = None) -> Tatoeba:
    """Read a Tatoeba ``sentences.csv`` export.

    Raises:
        SourceError: If the file cannot be read.
        MissingFieldError: On the first malformed line.
    """

    path = Path(path)
    try:
        with path.open("r", encoding="utf-8", newline="\n") as handle:
            corpus = parse_sentence_lines(handle, language_filter=language_filter)
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceError(path, f"IO error: {exc}") from exc
    logger.info("Loaded %d sentences from %s", len(corpus), path)
    return corpus


def load_japanese_sentences(path: Path) -> Tatoeba:
    """Read only the Japanese (``jpn``) sentences of a corpus file."""

    return load_sentences(path, language_filter=lambda language: language == JAPANESE)
