"""Parsed HTML documents with traversal and source-range lookup."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from htmlintel.html.nodes import HtmlNode
from htmlintel.html.parser import LineIndex, parse_html
from htmlintel.html.predicates import walk_all
from htmlintel.model.source_range import SourcePosition, SourceRange

log = logging.getLogger(__name__)

HtmlVisitor = Callable[[HtmlNode], None]

# Nodes handled between cooperative yields to the event loop.
VISIT_YIELD_EVERY = 500


class ParsedHtmlDocument:
    """An HTML document plus the tree parsed from it."""

    def __init__(self, url: str, contents: str, ast: HtmlNode) -> None:
        self.url = url
        self.contents = contents
        self.ast = ast
        self._index = LineIndex(contents)

    @classmethod
    def from_text(cls, url: str, contents: str) -> ParsedHtmlDocument:
        """
        Parse ``contents`` and wrap the result.

        Returns
        -------
        ParsedHtmlDocument
            Parsed document addressed by ``url``.
        """
        return cls(url, contents, parse_html(contents))

    @classmethod
    def from_path(cls, path: Path, root: Path | None = None) -> ParsedHtmlDocument:
        """
        Read and parse a file; the url is the POSIX path relative to ``root``.

        Returns
        -------
        ParsedHtmlDocument
            Parsed document.

        Raises
        ------
        OSError
            If the file cannot be read.
        """
        contents = path.read_text(encoding="utf-8")
        url = path.relative_to(root).as_posix() if root is not None else path.as_posix()
        return cls.from_text(url, contents)

    def _position(self, offset: int) -> SourcePosition:
        line, column = self._index.position(offset)
        return SourcePosition(line, column)

    def source_range_for_node(self, node: HtmlNode) -> SourceRange | None:
        """
        Compute the range of ``node``'s source text.

        Returns
        -------
        SourceRange | None
            Range with zero-based positions; None when the node carries no
            offsets (e.g. synthesized nodes).
        """
        if node.start is None or node.end is None:
            return None
        return SourceRange(self.url, self._position(node.start), self._position(node.end))

    def require_source_range(self, node: HtmlNode) -> SourceRange:
        """
        Compute the range of a node that must have been parsed from this document.

        Returns
        -------
        SourceRange
            Range of the node.

        Raises
        ------
        LookupError
            If the node has no recorded offsets.
        """
        source_range = self.source_range_for_node(node)
        if source_range is None:
            message = f"No source range for <{node.tag_name or node.node_type}> in {self.url}"
            raise LookupError(message)
        return source_range

    async def visit(self, visitors: Sequence[HtmlVisitor]) -> None:
        """
        Call every visitor once per node, in document order.

        Template content is traversed as if it were the template's children.
        Visitors run synchronously; the walk yields to the event loop between
        batches of nodes.
        """
        visited = 0
        for node in walk_all(self.ast, include_templates=True):
            for visitor in visitors:
                visitor(node)
            visited += 1
            if visited % VISIT_YIELD_EVERY == 0:
                await asyncio.sleep(0)
        log.debug("Visited %d nodes in %s", visited, self.url)
