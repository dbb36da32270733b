"""Typed parsers for JMdict, KANJIDIC2 and Tatoeba dictionary sources."""

from .errors import (
    DictionaryError,
    InvalidEnumError,
    InvalidIntegerError,
    InvalidValueError,
    MissingAttributeError,
    MissingFieldError,
    MissingTagError,
    MissingTextError,
    SourceError,
    StructureError,
)
from .jmdict.parser import load_jmdict
from .kanjidic.parser import load_kanjidic
from .tatoeba.parser import load_japanese_sentences, load_sentences

__all__ = [
    "DictionaryError",
    "SourceError",
    "StructureError",
    "MissingTagError",
    "MissingAttributeError",
    "MissingTextError",
    "MissingFieldError",
    "InvalidValueError",
    "InvalidEnumError",
    "InvalidIntegerError",
    "load_jmdict",
    "load_kanjidic",
    "load_sentences",
    "load_japanese_sentences",
]
