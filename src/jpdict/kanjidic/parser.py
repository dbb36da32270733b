"""Builders turning a KANJIDIC2 element tree into :class:`Kanjidic` records."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from jpdict.errors import MissingTagError
from jpdict.kanjidic.models import (
    DEFAULT_MEANING_LANG,
    Character,
    Codepoint,
    DictionaryReference,
    DictionarySystem,
    Grade,
    Kanjidic,
    Meaning,
    Misc,
    OnType,
    Radical,
    Reading,
    ReadingMeaningGroup,
    ReadingType,
    parse_dictionary_system,
    parse_grade,
    parse_on_type,
    parse_radical_type,
    parse_reading_type,
)
from jpdict.tree.children import (
    ChildField,
    collect_children,
    has_attribute,
    require_attribute,
    require_child,
    require_slot,
    require_text,
)
from jpdict.tree.node import Node, load_document
from jpdict.values import parse_integer

logger = logging.getLogger(__name__)

ROOT = "kanjidic2"
HEADER = "header"
CHARACTER = "character"

FILE_VERSION = "file_version"
DATABASE_VERSION = "database_version"
CREATION_DATE = "date_of_creation"

LITERAL = "literal"
CODEPOINT_GROUP = "codepoint"
CODEPOINT = "cp_value"
CODEPOINT_TYPE = "cp_type"
RADICAL_GROUP = "radical"
RADICAL = "rad_value"
RADICAL_TYPE = "rad_type"
MISC = "misc"
STROKE_COUNT = "stroke_count"
DIC_REF_GROUP = "dic_number"
DIC_REF = "dic_ref"
DIC_REF_TYPE = "dr_type"
MORO_VOL = "m_vol"
MORO_PAGE = "m_page"
READING_GROUP = "reading_meaning"
READING_MEANING = "rmgroup"
READING = "reading"
READING_TYPE = "r_type"
READING_ON_TYPE = "on_type"
READING_JA_STATUS = "r_status"
MEANING = "meaning"
MEANING_LANG = "m_lang"
NANORI = "nanori"


def _text_integer(node: Node) -> int:
    return parse_integer(require_text(node))


def build_header(node: Node) -> tuple[int, str, str]:
    """Extract ``(file_version, database_version, date_of_creation)``."""

    file_version = _text_integer(require_child(node, FILE_VERSION))
    database_version = require_text(require_child(node, DATABASE_VERSION))
    creation_date = require_text(require_child(node, CREATION_DATE))
    return file_version, database_version, creation_date


def build_codepoint(node: Node) -> Codepoint:
    return Codepoint(standard=require_attribute(node, CODEPOINT_TYPE), value=require_text(node))


def build_radical(node: Node) -> Radical:
    classification = parse_radical_type(require_attribute(node, RADICAL_TYPE))
    return Radical(classification=classification, value=_text_integer(node))


def _build_grade(node: Node) -> Grade:
    return parse_grade(_text_integer(node))


MISC_FIELDS = {
    "grade": ChildField("grade", _build_grade),
    STROKE_COUNT: ChildField("stroke_counts", _text_integer, repeated=True),
    "freq": ChildField("frequency", _text_integer),
    "jlpt": ChildField("old_jlpt", _text_integer),
}


def build_misc(node: Node) -> Misc:
    """Build the ``misc`` block.

    Raises:
        MissingTagError: If no ``stroke_count`` is present.
        InvalidEnumError: If ``grade`` is outside 1-6 and 8-10.
    """

    slots = collect_children(node, MISC_FIELDS)
    stroke_counts = slots["stroke_counts"]
    if not stroke_counts:
        raise MissingTagError(STROKE_COUNT)
    return Misc(
        stroke_count=stroke_counts[0],
        stroke_miscounts=tuple(stroke_counts[1:]),
        grade=slots.get("grade"),
        frequency=slots.get("frequency"),
        old_jlpt=slots.get("old_jlpt"),
    )


def _optional_integer_attribute(node: Node, name: str) -> int | None:
    value = node.attribute(name)
    if value is None:
        return None
    return parse_integer(value)


def build_dictionary_reference(node: Node) -> DictionaryReference:
    """Build one ``dic_ref``; Morohashi references also carry volume and page."""

    system = parse_dictionary_system(require_attribute(node, DIC_REF_TYPE))
    code = require_text(node)
    if system is not DictionarySystem.MOROHASHI:
        return DictionaryReference(system=system, code=code)
    return DictionaryReference(
        system=system,
        code=code,
        volume=_optional_integer_attribute(node, MORO_VOL),
        page=_optional_integer_attribute(node, MORO_PAGE),
    )


def _build_group(child_tag: str, build: Callable[[Node], Any]) -> Callable[[Node], tuple]:
    """Return a builder collecting every ``child_tag`` of a group container."""

    fields = {child_tag: ChildField("items", build, repeated=True)}

    def build_group(node: Node) -> tuple:
        return tuple(collect_children(node, fields)["items"])

    return build_group


build_codepoints = _build_group(CODEPOINT, build_codepoint)
build_radicals = _build_group(RADICAL, build_radical)
build_dictionary_references = _build_group(DIC_REF, build_dictionary_reference)


def build_reading(node: Node) -> Reading:
    """Build one ``reading``.

    ``on_type`` defaults to :attr:`OnType.NONE` when absent but an unknown
    value is an error. ``r_status`` is a presence-only flag.
    """

    value = require_text(node)
    reading_type = parse_reading_type(require_attribute(node, READING_TYPE))
    if reading_type is ReadingType.JA_ON:
        on_type_attr = node.attribute(READING_ON_TYPE)
        on_type = OnType.NONE if on_type_attr is None else parse_on_type(on_type_attr)
        return Reading(
            value=value,
            reading_type=reading_type,
            jouyou_approved=has_attribute(node, READING_JA_STATUS),
            on_type=on_type,
        )
    if reading_type is ReadingType.JA_KUN:
        return Reading(
            value=value,
            reading_type=reading_type,
            jouyou_approved=has_attribute(node, READING_JA_STATUS),
        )
    return Reading(value=value, reading_type=reading_type)


def build_meaning(node: Node) -> Meaning:
    lang = node.attribute(MEANING_LANG)
    return Meaning(
        text=require_text(node),
        lang=DEFAULT_MEANING_LANG if lang is None else lang,
    )


RMGROUP_FIELDS = {
    READING: ChildField("readings", build_reading, repeated=True),
    MEANING: ChildField("meanings", build_meaning, repeated=True),
}


def build_reading_meaning_group(node: Node) -> ReadingMeaningGroup:
    slots = collect_children(node, RMGROUP_FIELDS)
    return ReadingMeaningGroup(readings=tuple(slots["readings"]), meanings=tuple(slots["meanings"]))


READING_GROUP_FIELDS = {
    READING_MEANING: ChildField("groups", build_reading_meaning_group, repeated=True),
    NANORI: ChildField("nanori", require_text, repeated=True),
}


def build_reading_meanings(node: Node) -> tuple[tuple[ReadingMeaningGroup, ...], tuple[str, ...]]:
    """Split a ``reading_meaning`` block into its groups and nanori readings."""

    slots = collect_children(node, READING_GROUP_FIELDS)
    return tuple(slots["groups"]), tuple(slots["nanori"])


CHARACTER_FIELDS = {
    LITERAL: ChildField("literal", require_text),
    CODEPOINT_GROUP: ChildField("codepoints", build_codepoints, repeated=True),
    RADICAL_GROUP: ChildField("radicals", build_radicals, repeated=True),
    MISC: ChildField("misc", build_misc),
    DIC_REF_GROUP: ChildField("dictionary_refs", build_dictionary_references, repeated=True),
    READING_GROUP: ChildField("reading_meanings", build_reading_meanings, repeated=True),
}


def _flatten(groups: list[tuple]) -> tuple:
    return tuple(item for group in groups for item in group)


def build_character(node: Node) -> Character:
    """Build one ``character`` element.

    Repeated group containers (``codepoint``, ``radical``, ``dic_number``,
    ``reading_meaning``) are concatenated in source order.

    Raises:
        MissingTagError: If ``literal``, ``codepoint``, ``radical`` or ``misc``
            is absent.
    """

    slots = collect_children(node, CHARACTER_FIELDS)
    literal = require_slot(slots, "literal", LITERAL)
    if not slots["codepoints"]:
        raise MissingTagError(CODEPOINT_GROUP)
    if not slots["radicals"]:
        raise MissingTagError(RADICAL_GROUP)
    misc: Misc = require_slot(slots, "misc", MISC)

    reading_meanings = _flatten([groups for groups, _ in slots["reading_meanings"]])
    nanori = _flatten([names for _, names in slots["reading_meanings"]])

    return Character(
        literal=literal,
        codepoints=_flatten(slots["codepoints"]),
        radicals=_flatten(slots["radicals"]),
        stroke_count=misc.stroke_count,
        stroke_miscounts=misc.stroke_miscounts,
        grade=misc.grade,
        frequency=misc.frequency,
        old_jlpt=misc.old_jlpt,
        dictionary_refs=_flatten(slots["dictionary_refs"]),
        reading_meanings=reading_meanings,
        nanori=nanori,
    )


def parse_kanjidic(root: Node) -> Kanjidic:
    """Build the header and every ``character`` under a ``kanjidic2`` root.

    Raises:
        MissingTagError: If the root is not ``kanjidic2`` or has no ``header``.
        DictionaryError: The first failure of any character aborts the parse.
    """

    if root.tag_name() != ROOT:
        raise MissingTagError(ROOT)
    file_version, database_version, creation_date = build_header(require_child(root, HEADER))
    logger.debug(
        "KANJIDIC2 header: file_version=%d database_version=%s created=%s",
        file_version,
        database_version,
        creation_date,
    )

    characters = tuple(
        build_character(child) for child in root.children() if child.tag_name() == CHARACTER
    )
    return Kanjidic(
        file_version=file_version,
        database_version=database_version,
        creation_date=creation_date,
        characters=characters,
    )


def load_kanjidic(path: Path) -> Kanjidic:
    """Read and parse a KANJIDIC2 XML file.

    Raises:
        DictionaryError: Any transport, structural or value failure.
    """

    dictionary = parse_kanjidic(load_document(Path(path)))
    logger.info("Loaded %d KANJIDIC2 characters from %s", len(dictionary), path)
    return dictionary
