"""Minimal node interface consumed by the builders, plus its lxml binding.

Builders only depend on :class:`Node`, so the tree engine can be swapped
without touching the dictionary parsers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Protocol

from lxml import etree

from jpdict.errors import SourceError

logger = logging.getLogger(__name__)

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


class Node(Protocol):
    """Read-only view of one element in a parsed document."""

    def tag_name(self) -> str: ...

    def attribute(self, name: str) -> str | None: ...

    def attribute_ns(self, namespace: str, name: str) -> str | None: ...

    def children(self) -> Iterator["Node"]: ...

    def own_text(self) -> str | None: ...

    def first_element_child(self) -> "Node | None": ...


@dataclass(frozen=True)
class LxmlNode:
    """:class:`Node` implementation over an ``lxml.etree`` element."""

    element: etree._Element

    def tag_name(self) -> str:
        return etree.QName(self.element).localname

    def attribute(self, name: str) -> str | None:
        return self.element.get(name)

    def attribute_ns(self, namespace: str, name: str) -> str | None:
        return self.element.get(f"{{{namespace}}}{name}")

    def children(self) -> Iterator[LxmlNode]:
        # Comments and processing instructions are not part of the record tree.
        for child in self.element.iterchildren(tag=etree.Element):
            yield LxmlNode(child)

    def own_text(self) -> str | None:
        return self.element.text

    def first_element_child(self) -> LxmlNode | None:
        return next(self.children(), None)


def _make_parser() -> etree.XMLParser:
    """Build the lxml parser used for dictionary documents.

    JMdict expands thousands of internal DTD entities, which trips libxml2's
    default amplification limits unless ``huge_tree`` is set.
    """

    return etree.XMLParser(huge_tree=True, remove_comments=True, remove_pis=True)


def parse_document(data: bytes, source: Path | str | None = None) -> LxmlNode:
    """Parse an in-memory XML document and return its root element.

    Args:
        data: Complete document bytes.
        source: Optional origin used in error messages.

    Returns:
        Root element wrapped as a :class:`Node`.

    Raises:
        SourceError: If the document is not well-formed.
    """

    try:
        root = etree.fromstring(data, parser=_make_parser())
    except etree.XMLSyntaxError as exc:
        raise SourceError(source, f"XML error: {exc}") from exc
    return LxmlNode(root)


def load_document(path: Path) -> LxmlNode:
    """Read ``path`` fully into memory and parse it.

    Raises:
        SourceError: If the file cannot be read or is not well-formed XML.
    """

    try:
        data = path.read_bytes()
    except OSError as exc:
        raise SourceError(path, f"IO error: {exc}") from exc
    logger.debug("Read %d bytes from %s", len(data), path)
    return parse_document(data, source=path)
