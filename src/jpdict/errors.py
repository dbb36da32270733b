"""Error taxonomy shared by every dictionary parser.

Failures fall into three layers. ``SourceError`` covers transport problems
(the file cannot be read or is not well-formed). ``StructureError`` covers a
missing child tag, attribute, text node or delimited field. ``InvalidValueError``
covers tokens that are not a member of an enumerated set or are not integers.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


class DictionaryError(Exception):
    """Base class for all parse failures raised by ``jpdict``."""


class SourceError(DictionaryError):
    """The dictionary source could not be read or parsed into a tree."""

    def __init__(self, path: Path | str | None, reason: str) -> None:
        self.path = path
        self.reason = reason
        where = f"{path}: " if path is not None else ""
        super().__init__(f"Unreadable dictionary source: {where}{reason}")


class StructureError(DictionaryError):
    """A required part of a record is absent."""


class MissingTagError(StructureError):
    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"XML tag missing: {tag}")


class MissingAttributeError(StructureError):
    def __init__(self, attribute: str, tag: str | None = None) -> None:
        self.attribute = attribute
        self.tag = tag
        where = f" on <{tag}>" if tag else ""
        super().__init__(f"XML element attribute missing: {attribute}{where}")


class MissingTextError(StructureError):
    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"XML element text missing: {tag}")


class MissingFieldError(StructureError):
    """A delimited line has fewer fields than the record needs."""

    def __init__(self, field: str, line_number: int) -> None:
        self.field = field
        self.line_number = line_number
        super().__init__(f"Line {line_number}: {field} value not found")


class InvalidValueError(DictionaryError, ValueError):
    """A token was present but could not be converted."""


class InvalidEnumError(InvalidValueError):
    """A token is not one of the accepted values of a closed set."""

    def __init__(self, value: str, valids: Iterable[str]) -> None:
        self.value = value
        self.valids = tuple(valids)
        super().__init__(f"{value} is not a valid enum value for [{', '.join(self.valids)}]")


class InvalidIntegerError(InvalidValueError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"invalid integer value: {value!r}")
