"""HTML tree model, parsing, traversal, and scanner contract."""

from htmlintel.html.document import HtmlVisitor, ParsedHtmlDocument
from htmlintel.html.nodes import HtmlNode
from htmlintel.html.parser import parse_html
from htmlintel.html.scanner import HtmlScanner, VisitFunction

__all__ = [
    "HtmlNode",
    "HtmlScanner",
    "HtmlVisitor",
    "ParsedHtmlDocument",
    "VisitFunction",
    "parse_html",
]
