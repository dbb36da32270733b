"""Unit tests for JMdict entry builders and the document driver."""

from __future__ import annotations

import pytest

from jpdict.errors import InvalidIntegerError, MissingTagError, MissingTextError
from jpdict.jmdict.models import FrequencyRank, Gloss, LoanSource, PriorityRank
from jpdict.jmdict.parser import build_entry, build_sense, parse_jmdict
from jpdict.tree.node import LxmlNode, parse_document


def _node(xml: str) -> LxmlNode:
    return parse_document(xml.encode("utf-8"))


def test_gloss_language_defaults_to_eng_and_reads_namespaced_attribute() -> None:
    sense = build_sense(
        _node('<sense><gloss>book</gloss><gloss xml:lang="ger" lang="ignored">Buch</gloss></sense>')
    )

    assert sense.glosses == (
        Gloss(text="book", lang="eng"),
        Gloss(text="Buch", lang="ger"),
    )


def test_plain_lang_attribute_does_not_count_as_language() -> None:
    sense = build_sense(_node('<sense><gloss lang="fre">livre</gloss></sense>'))

    assert sense.glosses[0].lang == "eng"


def test_gloss_optional_attributes_and_empty_text() -> None:
    sense = build_sense(_node('<sense><gloss g_gend="fem" g_type="expl"/></sense>'))

    assert sense.glosses == (Gloss(text=None, lang="eng", gender="fem", gloss_type="expl"),)


def test_loan_source_flags_depend_on_attribute_presence() -> None:
    sense = build_sense(
        _node(
            "<sense>"
            "<lsource>plain</lsource>"
            '<lsource xml:lang="ger" ls_type="part">Arbeit</lsource>'
            '<lsource ls_wasei="y">salary man</lsource>'
            "</sense>"
        )
    )

    assert sense.loan_sources == (
        LoanSource(text="plain", lang="eng", full=True, wasei=False),
        LoanSource(text="Arbeit", lang="ger", full=False, wasei=False),
        LoanSource(text="salary man", lang="eng", full=True, wasei=True),
    )


def test_sense_demultiplexes_string_facets_in_order() -> None:
    sense = build_sense(
        _node(
            "<sense>"
            "<stagk>本</stagk><stagr>ほん</stagr><xref>書物</xref><ant>悪い</ant>"
            "<pos>n</pos><pos>adj-no</pos><field>comp</field><misc>uk</misc>"
            "<dial>ksb</dial><s_inf>usu. written</s_inf><example>ignored</example>"
            "</sense>"
        )
    )

    assert sense.restrict_kanji == ("本",)
    assert sense.restrict_reading == ("ほん",)
    assert sense.cross_refs == ("書物",)
    assert sense.antonyms == ("悪い",)
    assert sense.parts_of_speech == ("n", "adj-no")
    assert sense.fields == ("comp",)
    assert sense.misc == ("uk",)
    assert sense.dialects == ("ksb",)
    assert sense.info == ("usu. written",)
    assert sense.glosses == ()


def test_sense_string_facet_without_text_is_structural_error() -> None:
    with pytest.raises(MissingTextError, match="pos"):
        build_sense(_node("<sense><pos/></sense>"))


def test_entry_builds_forms_with_first_priority_only() -> None:
    entry = build_entry(
        _node(
            "<entry>"
            "<ent_seq>1582710</ent_seq>"
            "<k_ele><keb>本</keb><ke_pri>ichi1</ke_pri><ke_pri>news1</ke_pri></k_ele>"
            "<r_ele><reb>ほん</reb><re_pri>nf02</re_pri></r_ele>"
            "<r_ele><reb>もと</reb><re_pri>bogus</re_pri></r_ele>"
            "<sense><gloss>book</gloss></sense>"
            "</entry>"
        )
    )

    assert entry.seq == 1582710
    assert [(form.text, form.priority) for form in entry.kanji] == [("本", PriorityRank.ICHI1)]
    assert [(form.text, form.priority) for form in entry.readings] == [
        ("ほん", FrequencyRank(2)),
        ("もと", None),
    ]
    assert len(entry.senses) == 1


def test_entry_visits_container_children_without_own_text() -> None:
    # Compact markup leaves containers with no text node of their own.
    entry = build_entry(_node("<entry><ent_seq>1</ent_seq><r_ele><reb>あ</reb></r_ele></entry>"))

    assert [form.text for form in entry.readings] == ["あ"]


def test_missing_ent_seq_is_structural_error() -> None:
    with pytest.raises(MissingTagError) as excinfo:
        build_entry(_node("<entry><r_ele><reb>あ</reb></r_ele></entry>"))

    assert excinfo.value.tag == "ent_seq"


def test_non_numeric_ent_seq_is_value_error() -> None:
    with pytest.raises(InvalidIntegerError) as excinfo:
        build_entry(_node("<entry><ent_seq>abc</ent_seq></entry>"))

    assert excinfo.value.value == "abc"


def test_kanji_form_without_keb_fails() -> None:
    with pytest.raises(MissingTagError, match="keb"):
        build_entry(_node("<entry><ent_seq>1</ent_seq><k_ele><ke_pri>news1</ke_pri></k_ele></entry>"))


def test_document_driver_keeps_order_and_duplicates() -> None:
    dictionary = parse_jmdict(
        _node(
            "<JMdict>"
            "<entry><ent_seq>3</ent_seq></entry>"
            "<entry><ent_seq>1</ent_seq></entry>"
            "<entry><ent_seq>3</ent_seq></entry>"
            "</JMdict>"
        )
    )

    assert [entry.seq for entry in dictionary.entries] == [3, 1, 3]
    assert dictionary.find_seq(3) is dictionary.entries[0]


def test_document_driver_aborts_on_first_bad_entry() -> None:
    with pytest.raises(MissingTagError, match="ent_seq"):
        parse_jmdict(
            _node(
                "<JMdict>"
                "<entry><ent_seq>1</ent_seq></entry>"
                "<entry><r_ele><reb>あ</reb></r_ele></entry>"
                "</JMdict>"
            )
        )
