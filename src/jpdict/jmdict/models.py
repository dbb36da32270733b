"""Typed records for the JMdict multilingual lexicon.

Every record is immutable and keeps repeated fields as tuples in source order;
the first kanji and reading forms of an entry are the preferred ones.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Callable, Union

from jpdict.values import lookup_token

DEFAULT_LANG = "eng"

FREQUENCY_RANK_RE = re.compile(r"nf([0-9]+)")


class PriorityRank(Enum):
    """Named priority markers from ``ke_pri`` / ``re_pri``."""

    NEWS1 = "news1"
    NEWS2 = "news2"
    ICHI1 = "ichi1"
    ICHI2 = "ichi2"
    SPEC1 = "spec1"
    SPEC2 = "spec2"
    GAI1 = "gai1"
    GAI2 = "gai2"


@dataclass(frozen=True)
class FrequencyRank:
    """``nfNN`` marker: the word is in the NN-th block of 500 by frequency."""

    rank: int


Priority = Union[PriorityRank, FrequencyRank]

PRIORITY_TOKENS: dict[str, PriorityRank] = {rank.value: rank for rank in PriorityRank}


def parse_priority(token: str) -> Priority | None:
    """Map a priority token to its rank.

    Priority is decorative metadata, so anything unrecognized (including a bare
    ``nf`` or an empty token) yields ``None`` instead of an error.

    Args:
        token: Raw ``ke_pri``/``re_pri`` text.

    Returns:
        A :class:`PriorityRank`, a :class:`FrequencyRank`, or ``None``.
    """

    named = lookup_token(token, PRIORITY_TOKENS)
    if named is not None:
        return named
    match = FREQUENCY_RANK_RE.fullmatch(token)
    if match is None:
        return None
    return FrequencyRank(int(match.group(1)))


@dataclass(frozen=True)
class KanjiForm:
    text: str
    priority: Priority | None = None


@dataclass(frozen=True)
class ReadingForm:
    text: str
    priority: Priority | None = None


@dataclass(frozen=True)
class Gloss:
    """Target-language translation of a sense.

    ``lang`` comes from the namespaced ``xml:lang`` attribute and defaults to
    ``eng``. ``gender`` and ``gloss_type`` mirror ``g_gend`` and ``g_type``.
    """

    text: str | None
    lang: str = DEFAULT_LANG
    gender: str | None = None
    gloss_type: str | None = None


@dataclass(frozen=True)
class LoanSource:
    """Foreign-language origin of a loanword.

    Attributes:
        text: Source-language term, when given.
        lang: ``xml:lang`` value, ``eng`` when absent.
        full: ``False`` only when ``ls_type`` marks a partial description.
        wasei: ``True`` when ``ls_wasei`` marks a word constructed in Japanese
            from source-language parts (waseieigo).
    """

    text: str | None
    lang: str = DEFAULT_LANG
    full: bool = True
    wasei: bool = False


@dataclass(frozen=True)
class Sense:
    restrict_kanji: tuple[str, ...] = ()
    restrict_reading: tuple[str, ...] = ()
    cross_refs: tuple[str, ...] = ()
    antonyms: tuple[str, ...] = ()
    parts_of_speech: tuple[str, ...] = ()
    fields: tuple[str, ...] = ()
    misc: tuple[str, ...] = ()
    dialects: tuple[str, ...] = ()
    info: tuple[str, ...] = ()
    glosses: tuple[Gloss, ...] = ()
    loan_sources: tuple[LoanSource, ...] = ()


@dataclass(frozen=True)
class Entry:
    """One JMdict entry keyed by its ``ent_seq`` number."""

    seq: int
    kanji: tuple[KanjiForm, ...] = ()
    readings: tuple[ReadingForm, ...] = ()
    senses: tuple[Sense, ...] = ()


@dataclass(frozen=True)
class JMdict:
    """Parsed lexicon with read-only query helpers.

    Lookups by surface text use a lazily built index; entries sharing a
    sequence number are kept as distinct records.
    """

    entries: tuple[Entry, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.entries)

    @cached_property
    def entries_by_text(self) -> dict[str, tuple[Entry, ...]]:
        """Build and cache a kanji/reading text -> entries index."""

        mapping: dict[str, list[Entry]] = {}
        for entry in self.entries:
            texts = [form.text for form in entry.kanji] + [form.text for form in entry.readings]
            for text in dict.fromkeys(texts):
                mapping.setdefault(text, []).append(entry)
        return {text: tuple(items) for text, items in mapping.items()}

    def find_seq(self, seq: int) -> Entry | None:
        """Return the first entry with sequence number ``seq``."""

        return next((entry for entry in self.entries if entry.seq == seq), None)

    def filter(self, predicate: Callable[[Entry], bool]) -> list[Entry]:
        return [entry for entry in self.entries if predicate(entry)]

    def filter_kanji(self, predicate: Callable[[KanjiForm], bool]) -> list[Entry]:
        return self.filter(lambda entry: any(predicate(form) for form in entry.kanji))

    def filter_reading(self, predicate: Callable[[ReadingForm], bool]) -> list[Entry]:
        return self.filter(lambda entry: any(predicate(form) for form in entry.readings))

    def filter_gloss(self, predicate: Callable[[Gloss], bool]) -> list[Entry]:
        return self.filter(
            lambda entry: any(predicate(gloss) for sense in entry.senses for gloss in sense.glosses)
        )

    def search(self, phrase: str) -> list[Entry]:
        """Return entries whose kanji or reading text equals ``phrase``."""

        return list(self.entries_by_text.get(phrase, ()))

    def antonyms(self, entry: Entry) -> list[Entry]:
        """Resolve the ``ant`` references of ``entry`` to entries."""

        return [
            found
            for sense in entry.senses
            for antonym in sense.antonyms
            for found in self.search(antonym)
        ]
