"""Tag-dispatch helpers used by every entry builder.

A builder declares a table mapping child tag names to :class:`ChildField`
handlers and calls :func:`collect_children` once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from jpdict.errors import MissingAttributeError, MissingTagError, MissingTextError
from jpdict.tree.node import Node


@dataclass(frozen=True)
class ChildField:
    """How to fold one child tag into a record under construction.

    Attributes:
        slot: Name of the slot the built value lands in.
        build: Builder applied to the child node.
        repeated: ``True`` for append-only lists, ``False`` for singletons
            where the first occurrence wins.
    """

    slot: str
    build: Callable[[Node], Any]
    repeated: bool = False


def collect_children(node: Node, fields: Mapping[str, ChildField]) -> dict[str, Any]:
    """Walk ``node``'s direct children once and fill slots from ``fields``.

    Unknown tags are ignored. Repeated slots always exist in the result (as a
    possibly empty list); singleton slots exist only when the tag was seen.
    Every occurrence is built, so a malformed duplicate still fails, but a
    singleton slot keeps the first value. Builder errors propagate unchanged.

    Args:
        node: Parent node.
        fields: Mapping of child tag name to handler.

    Returns:
        Dictionary of slot name to built value or list of values.
    """

    slots: dict[str, Any] = {field.slot: [] for field in fields.values() if field.repeated}
    for child in node.children():
        field = fields.get(child.tag_name())
        if field is None:
            continue
        value = field.build(child)
        if field.repeated:
            slots[field.slot].append(value)
        elif field.slot not in slots:
            slots[field.slot] = value
    return slots


def require_slot(slots: Mapping[str, Any], slot: str, tag: str) -> Any:
    """Return a singleton slot or fail with the tag that should have filled it."""

    if slot not in slots:
        raise MissingTagError(tag)
    return slots[slot]


def find_child(node: Node, tag: str) -> Node | None:
    for child in node.children():
        if child.tag_name() == tag:
            return child
    return None


def require_child(node: Node, tag: str) -> Node:
    child = find_child(node, tag)
    if child is None:
        raise MissingTagError(tag)
    return child


def require_attribute(node: Node, name: str) -> str:
    value = node.attribute(name)
    if value is None:
        raise MissingAttributeError(name, node.tag_name())
    return value


def require_text(node: Node) -> str:
    text = node.own_text()
    if text is None:
        raise MissingTextError(node.tag_name())
    return text


def has_attribute(node: Node, name: str) -> bool:
    """Presence test for flag attributes whose value carries no meaning."""

    return node.attribute(name) is not None
