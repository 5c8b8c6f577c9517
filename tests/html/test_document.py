"""Parsed document source ranges and traversal."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from htmlintel.html import document as document_module
from htmlintel.html.document import ParsedHtmlDocument
from htmlintel.html.nodes import HtmlNode
from htmlintel.model.source_range import SourcePosition, SourceRange
from tests._helpers.builders import parse, write_html
from tests._helpers.expect import expect_equal, expect_none, expect_true


def test_source_range_for_multiline_nodes() -> None:
    doc = parse("<div>\n  <span>x</span>\n</div>", url="pages/a.html")
    div = doc.ast.children[0]
    span = div.children[1]
    expect_equal(
        doc.source_range_for_node(span),
        SourceRange("pages/a.html", SourcePosition(1, 2), SourcePosition(1, 16)),
        label="span range",
    )
    div_range = doc.source_range_for_node(div)
    expect_true(div_range is not None, message="div should have a range")
    if div_range is not None:
        expect_equal(div_range.end, SourcePosition(2, 6), label="div end")
        expect_true(div_range.contains(SourcePosition(1, 4)), message="div contains span text")


def test_synthesized_nodes_have_no_range() -> None:
    doc = parse("<p></p>")
    orphan = HtmlNode("element", tag_name="x-orphan")
    expect_none(doc.source_range_for_node(orphan), label="orphan range")
    with pytest.raises(LookupError, match="x-orphan"):
        doc.require_source_range(orphan)


def test_visit_reaches_every_node_once_in_document_order() -> None:
    doc = parse("<a><b></b><template><c></c></template></a><d></d>")
    seen: list[str] = []
    other: list[str] = []

    def _record(node: HtmlNode) -> None:
        if node.is_element and node.tag_name:
            seen.append(node.tag_name)

    def _record_other(node: HtmlNode) -> None:
        if node.is_element and node.tag_name:
            other.append(node.tag_name)

    asyncio.run(doc.visit([_record, _record_other]))
    expect_equal(seen, ["a", "b", "template", "c", "d"], label="visit order")
    expect_equal(other, seen, label="second visitor")


def test_visit_yields_between_batches(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(document_module, "VISIT_YIELD_EVERY", 2)
    doc = parse("<i></i>" * 5)
    count = 0

    def _count(node: HtmlNode) -> None:
        nonlocal count
        count += 1

    asyncio.run(doc.visit([_count]))
    expect_equal(count, 5, label="visited nodes")


def test_from_path_uses_root_relative_url(tmp_path: Path) -> None:
    path = write_html(tmp_path, "elements/x.html", "<dom-module id='x'></dom-module>")
    doc = ParsedHtmlDocument.from_path(path, tmp_path)
    expect_equal(doc.url, "elements/x.html", label="url")
    expect_equal(doc.ast.children[0].get_attribute("id"), "x", label="parsed")
