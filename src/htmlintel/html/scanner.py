"""Scanner contract for HTML documents."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import Protocol

from htmlintel.html.document import HtmlVisitor, ParsedHtmlDocument
from htmlintel.model.feature import Resolvable

VisitFunction = Callable[[HtmlVisitor], Awaitable[None]]


class HtmlScanner(Protocol):
    """Extract scanned features from a parsed HTML document."""

    async def scan(
        self,
        document: ParsedHtmlDocument,
        visit: VisitFunction,
    ) -> Sequence[Resolvable]:
        """Return scanned features in the order ``visit`` delivered their nodes."""
        ...
