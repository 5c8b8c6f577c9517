"""In-memory HTML tree with a separate content root for template elements."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Final, Literal

NodeType = Literal["document", "fragment", "element", "text", "comment", "doctype"]

DOCUMENT: Final = "document"
FRAGMENT: Final = "fragment"
ELEMENT: Final = "element"
TEXT: Final = "text"
COMMENT: Final = "comment"
DOCTYPE: Final = "doctype"


@dataclass(eq=False)
class HtmlNode:
    """
    A node of a parsed HTML document.

    Nodes compare by identity. A ``<template>`` element keeps its body in
    ``template_content`` (a ``fragment`` node) instead of ``children``; the
    fragment points back at its element through ``template_host``.

    Attributes
    ----------
    node_type : NodeType
        Kind of node.
    tag_name : str | None
        Lowercased tag name for elements, otherwise None.
    attrs : list[tuple[str, str]]
        Attributes in source order; names are lowercased.
    children : list[HtmlNode]
        Ordinary child nodes.
    data : str
        Payload of text, comment, and doctype nodes.
    start, end : int | None
        Character offsets of the node's source text, when known.
    """

    node_type: NodeType
    tag_name: str | None = None
    attrs: list[tuple[str, str]] = field(default_factory=list)
    children: list[HtmlNode] = field(default_factory=list, repr=False)
    data: str = ""
    start: int | None = None
    end: int | None = None
    parent: HtmlNode | None = field(default=None, repr=False)
    template_content: HtmlNode | None = field(default=None, repr=False)
    template_host: HtmlNode | None = field(default=None, repr=False)

    @property
    def is_element(self) -> bool:
        """True for element nodes."""
        return self.node_type == ELEMENT

    @property
    def is_comment(self) -> bool:
        """True for comment nodes."""
        return self.node_type == COMMENT

    @property
    def is_text(self) -> bool:
        """True for text nodes."""
        return self.node_type == TEXT

    def get_attribute(self, name: str) -> str | None:
        """
        Return the first value of an attribute.

        Returns
        -------
        str | None
            Attribute value, or None when the attribute is absent.
        """
        wanted = name.lower()
        for attr_name, value in self.attrs:
            if attr_name == wanted:
                return value
        return None

    def has_attribute(self, name: str) -> bool:
        """
        Check for an attribute regardless of its value.

        Returns
        -------
        bool
            True when the attribute is present.
        """
        wanted = name.lower()
        return any(attr_name == wanted for attr_name, _ in self.attrs)

    def append_child(self, child: HtmlNode) -> None:
        """Attach ``child`` as the last ordinary child."""
        child.parent = self
        self.children.append(child)

    def previous_siblings(self) -> Iterator[HtmlNode]:
        """
        Yield siblings preceding this node, closest first.

        Yields
        ------
        HtmlNode
            Preceding siblings in reverse document order.
        """
        if self.parent is None:
            return
        siblings = self.parent.children
        index = next(i for i, sibling in enumerate(siblings) if sibling is self)
        yield from reversed(siblings[:index])

    def text_content(self) -> str:
        """
        Concatenate text below this node.

        Returns
        -------
        str
            Payload for text/comment nodes; joined descendant text otherwise.
        """
        if self.node_type in (TEXT, COMMENT):
            return self.data
        return "".join(child.text_content() for child in self.children)
