"""Builders turning a JMdict element tree into :class:`JMdict` records."""

from __future__ import annotations

import logging
from pathlib import Path

from jpdict.jmdict.models import (
    DEFAULT_LANG,
    Entry,
    Gloss,
    JMdict,
    KanjiForm,
    LoanSource,
    Priority,
    ReadingForm,
    Sense,
    parse_priority,
)
from jpdict.tree.children import (
    ChildField,
    collect_children,
    find_child,
    has_attribute,
    require_child,
    require_slot,
    require_text,
)
from jpdict.tree.node import XML_NAMESPACE, Node, load_document
from jpdict.values import parse_integer

logger = logging.getLogger(__name__)

SEQ = "ent_seq"
KANJI_ELE = "k_ele"
KANJI_TEXT = "keb"
KANJI_PRI = "ke_pri"
READING_ELE = "r_ele"
READING_TEXT = "reb"
READING_PRI = "re_pri"
SENSE = "sense"

LANG = "lang"
LSOURCE_TYPE = "ls_type"
LSOURCE_WASEI = "ls_wasei"
GLOSS_GENDER = "g_gend"
GLOSS_TYPE = "g_type"


def _optional_priority(node: Node, tag: str) -> Priority | None:
    """Resolve the first priority child, degrading every failure to ``None``."""

    child = find_child(node, tag)
    if child is None:
        return None
    text = child.own_text()
    if text is None:
        return None
    return parse_priority(text)


def build_kanji_form(node: Node) -> KanjiForm:
    text = require_text(require_child(node, KANJI_TEXT))
    return KanjiForm(text=text, priority=_optional_priority(node, KANJI_PRI))


def build_reading_form(node: Node) -> ReadingForm:
    text = require_text(require_child(node, READING_TEXT))
    return ReadingForm(text=text, priority=_optional_priority(node, READING_PRI))


def _namespaced_lang(node: Node) -> str:
    lang = node.attribute_ns(XML_NAMESPACE, LANG)
    return DEFAULT_LANG if lang is None else lang


def build_gloss(node: Node) -> Gloss:
    return Gloss(
        text=node.own_text(),
        lang=_namespaced_lang(node),
        gender=node.attribute(GLOSS_GENDER),
        gloss_type=node.attribute(GLOSS_TYPE),
    )


def build_loan_source(node: Node) -> LoanSource:
    return LoanSource(
        text=node.own_text(),
        lang=_namespaced_lang(node),
        full=not has_attribute(node, LSOURCE_TYPE),
        wasei=has_attribute(node, LSOURCE_WASEI),
    )


SENSE_FIELDS = {
    "stagk": ChildField("restrict_kanji", require_text, repeated=True),
    "stagr": ChildField("restrict_reading", require_text, repeated=True),
    "xref": ChildField("cross_refs", require_text, repeated=True),
    "ant": ChildField("antonyms", require_text, repeated=True),
    "pos": ChildField("parts_of_speech", require_text, repeated=True),
    "field": ChildField("fields", require_text, repeated=True),
    "misc": ChildField("misc", require_text, repeated=True),
    "dial": ChildField("dialects", require_text, repeated=True),
    "s_inf": ChildField("info", require_text, repeated=True),
    "gloss": ChildField("glosses", build_gloss, repeated=True),
    "lsource": ChildField("loan_sources", build_loan_source, repeated=True),
}


def build_sense(node: Node) -> Sense:
    """Demultiplex the children of a ``sense`` element into its facets."""

    slots = collect_children(node, SENSE_FIELDS)
    return Sense(**{slot: tuple(values) for slot, values in slots.items()})


def _build_seq(node: Node) -> int:
    return parse_integer(require_text(node))


ENTRY_FIELDS = {
    SEQ: ChildField("seq", _build_seq),
    KANJI_ELE: ChildField("kanji", build_kanji_form, repeated=True),
    READING_ELE: ChildField("readings", build_reading_form, repeated=True),
    SENSE: ChildField("senses", build_sense, repeated=True),
}


def build_entry(node: Node) -> Entry:
    """Build one ``entry`` element.

    Container children are always visited, whether or not they carry text of
    their own.

    Raises:
        MissingTagError: If ``ent_seq`` (or a nested required tag) is absent.
        InvalidIntegerError: If ``ent_seq`` is not numeric.
    """

    slots = collect_children(node, ENTRY_FIELDS)
    return Entry(
        seq=require_slot(slots, "seq", SEQ),
        kanji=tuple(slots["kanji"]),
        readings=tuple(slots["readings"]),
        senses=tuple(slots["senses"]),
    )


def parse_jmdict(root: Node) -> JMdict:
    """Build every entry under the document root, in source order.

    The first failing entry aborts the whole document; no partial lexicon is
    returned.
    """

    entries = tuple(build_entry(child) for child in root.children())
    logger.debug("Built %d JMdict entries under <%s>", len(entries), root.tag_name())
    return JMdict(entries=entries)


def load_jmdict(path: Path) -> JMdict:
    """Read and parse a JMdict XML file.

    Args:
        path: JMdict document path.

    Returns:
        Parsed lexicon.

    Raises:
        DictionaryError: Any transport, structural or value failure.
    """

    dictionary = parse_jmdict(load_document(Path(path)))
    logger.info("Loaded %d JMdict entries from %s", len(dictionary), path)
    return dictionary
