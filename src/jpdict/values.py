"""Pure token parsers shared by the dictionary builders.

Lookups return ``None`` for "no match" so each caller decides whether absence
is fatal. The ``require_*``/``parse_*`` variants raise the corresponding
``InvalidValueError`` for required fields.
"""

from __future__ import annotations

import re
from typing import Mapping, TypeVar

from jpdict.errors import InvalidEnumError, InvalidIntegerError

T = TypeVar("T")

INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def lookup_token(token: str, table: Mapping[str, T]) -> T | None:
    """Return the value mapped to ``token`` or ``None`` when unmatched.

    Matching is exact: no trimming and no case folding.
    """

    return table.get(token)


def require_token(token: str, table: Mapping[str, T]) -> T:
    """Return the value mapped to ``token``.

    Args:
        token: Raw token from a tag text or attribute.
        table: Ordered token table; its keys form the accepted set.

    Returns:
        The mapped value.

    Raises:
        InvalidEnumError: If ``token`` is not a key of ``table``.
    """

    value = lookup_token(token, table)
    if value is None:
        raise InvalidEnumError(token, table.keys())
    return value


def try_parse_integer(token: str) -> int | None:
    """Parse a signed decimal integer, returning ``None`` when malformed."""

    if not INTEGER_RE.fullmatch(token):
        return None
    return int(token)


def parse_integer(token: str) -> int:
    """Parse a signed decimal integer.

    Raises:
        InvalidIntegerError: If ``token`` is not an optional sign followed by
            ASCII digits.
    """

    value = try_parse_integer(token)
    if value is None:
        raise InvalidIntegerError(token)
    return value
