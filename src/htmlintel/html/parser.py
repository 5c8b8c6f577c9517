"""Build position-tracking HTML trees from markup text."""

from __future__ import annotations

import bisect
import logging
from html.parser import HTMLParser
from typing import Final

from htmlintel.html.nodes import COMMENT, DOCTYPE, DOCUMENT, ELEMENT, FRAGMENT, TEXT, HtmlNode

log = logging.getLogger(__name__)

VOID_ELEMENTS: Final[frozenset[str]] = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)


class LineIndex:
    """Map ``(line, column)`` pairs to offsets and back."""

    def __init__(self, source: str) -> None:
        self.line_starts: list[int] = [0]
        for index, char in enumerate(source):
            if char == "\n":
                self.line_starts.append(index + 1)

    def offset(self, line: int, column: int) -> int:
        """
        Convert a one-based line and zero-based column to an offset.

        Returns
        -------
        int
            Character offset into the source.
        """
        return self.line_starts[line - 1] + column

    def position(self, offset: int) -> tuple[int, int]:
        """
        Convert an offset to a zero-based ``(line, column)`` pair.

        Returns
        -------
        tuple[int, int]
            Line and column of ``offset``.
        """
        line = bisect.bisect_right(self.line_starts, offset) - 1
        return line, offset - self.line_starts[line]


class _TreeBuilder(HTMLParser):
    """Tokenizer callbacks that assemble an HtmlNode tree."""

    def __init__(self, source: str) -> None:
        super().__init__(convert_charrefs=True)
        self.source = source
        self.index = LineIndex(source)
        self.document = HtmlNode(DOCUMENT, start=0, end=len(source))
        # (element, container) pairs; container differs from element for <template>.
        self._open: list[tuple[HtmlNode, HtmlNode]] = [(self.document, self.document)]
        self._pending_text: HtmlNode | None = None

    @property
    def _container(self) -> HtmlNode:
        return self._open[-1][1]

    def _offset(self) -> int:
        line, column = self.getpos()
        return self.index.offset(line, column)

    def _flush_text(self, end: int) -> None:
        if self._pending_text is not None:
            self._pending_text.end = end
            self._pending_text = None

    def _tag_end(self, start: int) -> int:
        close = self.source.find(">", start)
        return len(self.source) if close < 0 else close + 1

    def _new_element(self, tag: str, attrs: list[tuple[str, str | None]]) -> HtmlNode:
        start = self._offset()
        self._flush_text(start)
        raw = self.get_starttag_text() or ""
        element = HtmlNode(
            ELEMENT,
            tag_name=tag,
            attrs=[(name, value if value is not None else "") for name, value in attrs],
            start=start,
            end=start + len(raw) if raw else self._tag_end(start),
        )
        self._container.append_child(element)
        if tag == "template":
            element.template_content = HtmlNode(
                FRAGMENT, start=element.end, end=element.end, template_host=element
            )
        return element

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        element = self._new_element(tag, attrs)
        if tag in VOID_ELEMENTS:
            return
        self._open.append((element, element.template_content or element))

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._new_element(tag, attrs)

    def _close_implied(self, element: HtmlNode, container: HtmlNode) -> None:
        # No end tag: the element stops where its last descendant stops.
        if container.children:
            last_end = container.children[-1].end
            if last_end is not None:
                element.end = last_end
        if container is not element:
            container.end = element.end

    def handle_endtag(self, tag: str) -> None:
        start = self._offset()
        self._flush_text(start)
        for depth in range(len(self._open) - 1, 0, -1):
            if self._open[depth][0].tag_name == tag:
                break
        else:
            log.debug("Ignoring unmatched </%s> at offset %d", tag, start)
            return
        end = self._tag_end(start)
        while len(self._open) > depth + 1:
            self._close_implied(*self._open.pop())
        element, container = self._open.pop()
        element.end = end
        if container is not element:
            container.end = start

    def handle_data(self, data: str) -> None:
        if self._pending_text is not None:
            self._pending_text.data += data
            return
        start = self._offset()
        text = HtmlNode(TEXT, data=data, start=start, end=start + len(data))
        self._container.append_child(text)
        self._pending_text = text

    def handle_comment(self, data: str) -> None:
        start = self._offset()
        self._flush_text(start)
        end = self.source.find("-->", start)
        end = self._tag_end(start) if end < 0 else end + 3
        self._container.append_child(HtmlNode(COMMENT, data=data, start=start, end=end))

    def handle_decl(self, decl: str) -> None:
        start = self._offset()
        self._flush_text(start)
        self._container.append_child(
            HtmlNode(DOCTYPE, data=decl, start=start, end=self._tag_end(start))
        )

    def handle_pi(self, data: str) -> None:
        self._flush_text(self._offset())

    def unknown_decl(self, data: str) -> None:
        self._flush_text(self._offset())

    def finish(self) -> HtmlNode:
        self.close()
        eof = len(self.source)
        self._flush_text(eof)
        while len(self._open) > 1:
            self._close_implied(*self._open.pop())
        return self.document


def parse_html(source: str) -> HtmlNode:
    """
    Parse markup into an HtmlNode document.

    The tree builder is lenient: end tags close the nearest open element of
    the same name, unmatched end tags are dropped, and anything still open at
    end of input is closed there. An element without its own end tag ends
    where its last descendant ends, or after its start tag when empty.
    ``<template>`` bodies are stored in the element's ``template_content``
    fragment.

    Parameters
    ----------
    source
        Markup text.

    Returns
    -------
    HtmlNode
        Root ``document`` node.
    """
    builder = _TreeBuilder(source)
    builder.feed(source)
    return builder.finish()
