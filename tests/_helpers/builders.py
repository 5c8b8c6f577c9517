"""Builders for parsed documents and scanner runs used across tests."""

from __future__ import annotations

import asyncio
from pathlib import Path
from textwrap import dedent

from htmlintel.html.document import HtmlVisitor, ParsedHtmlDocument
from htmlintel.polymer.dom_module_scanner import DomModuleScanner, ScannedDomModule


def parse(contents: str, url: str = "test.html") -> ParsedHtmlDocument:
    """
    Parse markup into a document.

    Returns
    -------
    ParsedHtmlDocument
        Parsed document addressed by ``url``.
    """
    return ParsedHtmlDocument.from_text(url, contents)


def scan_dom_modules(contents: str, url: str = "test.html") -> list[ScannedDomModule]:
    """
    Run the dom-module scanner over markup using the document's own traversal.

    Returns
    -------
    list[ScannedDomModule]
        Scanned records in document order.
    """
    document = parse(contents, url)

    async def _visit(visitor: HtmlVisitor) -> None:
        await document.visit([visitor])

    return asyncio.run(DomModuleScanner().scan(document, _visit))


def write_html(root: Path, rel_path: str, contents: str) -> Path:
    """
    Write a dedented HTML file under ``root``.

    Returns
    -------
    Path
        Path of the written file.
    """
    path = root / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dedent(contents), encoding="utf-8")
    return path
