"""Tree construction rules of the HTML parser."""

from __future__ import annotations

from htmlintel.html.nodes import HtmlNode
from htmlintel.html.parser import LineIndex, parse_html
from tests._helpers.expect import expect_equal, expect_is, expect_length, expect_true


def _tags(nodes: list[HtmlNode]) -> list[str | None]:
    return [node.tag_name for node in nodes if node.is_element]


def test_template_children_live_in_content_fragment() -> None:
    doc = parse_html("<template><p>hi</p><span></span></template>")
    template = doc.children[0]
    content = template.template_content
    expect_equal(template.children, [], label="ordinary children")
    expect_true(content is not None, message="template should have content")
    if content is None:
        return
    expect_equal(content.node_type, "fragment", label="content type")
    expect_equal(_tags(content.children), ["p", "span"], label="content tags")
    expect_is(content.template_host, template, label="template_host")
    expect_is(content.children[0].parent, content, label="parent")


def test_void_elements_do_not_capture_following_siblings() -> None:
    doc = parse_html('<div><img src="a.png"><br><span></span></div>')
    div = doc.children[0]
    expect_equal(_tags(div.children), ["img", "br", "span"], label="div children")
    expect_equal(div.children[0].children, [], label="img children")


def test_unmatched_end_tag_is_ignored() -> None:
    doc = parse_html("<div></span><p></p></div>")
    expect_equal(_tags(doc.children[0].children), ["p"], label="div children")


def test_end_tag_closes_intervening_elements() -> None:
    doc = parse_html("<div><p><b>bold</div><section></section>")
    expect_equal(_tags(doc.children), ["div", "section"], label="top level")


def test_unclosed_elements_end_at_end_of_input() -> None:
    source = "<div><p>text"
    doc = parse_html(source)
    div = doc.children[0]
    expect_equal(div.end, len(source), label="div end")
    expect_equal(div.children[0].end, len(source), label="p end")


def test_implied_end_is_end_of_last_descendant() -> None:
    source = "<div><p>a</span></div>"
    div = parse_html(source).children[0]
    para = div.children[0]
    expect_equal(para.end, source.index("</span>"), label="p end")
    expect_equal(div.end, len(source), label="div end")


def test_implied_end_at_end_of_input_skips_trailing_junk() -> None:
    source = "<section><b></b><?pi?>"
    section = parse_html(source).children[0]
    expect_equal(section.end, source.index("<?pi"), label="section end")


def test_empty_element_without_end_tag_ends_after_start_tag() -> None:
    source = "<div><p class=\"x\"></i></div>"
    para = parse_html(source).children[0].children[0]
    expect_equal((para.start, para.end), (5, 18), label="p span")


def test_unclosed_template_content_ends_with_last_child() -> None:
    source = "<template><span></span></x>"
    template = parse_html(source).children[0]
    content = template.template_content
    expect_true(content is not None, message="template should have content")
    if content is None:
        return
    expect_equal(content.end, source.index("</x>"), label="content end")
    expect_equal(template.end, content.end, label="template end")


def test_attribute_names_lowercased_and_bare_values_empty() -> None:
    doc = parse_html('<input DISABLED Name="q">')
    element = doc.children[0]
    expect_equal(element.get_attribute("disabled"), "", label="disabled")
    expect_equal(element.get_attribute("name"), "q", label="name")
    expect_true(element.has_attribute("NAME"), message="lookup is case-insensitive")


def test_self_closing_tag_does_not_open_element() -> None:
    doc = parse_html('<div><slot name="x"/><span></span></div>')
    expect_equal(_tags(doc.children[0].children), ["slot", "span"], label="children")


def test_comments_text_and_offsets() -> None:
    source = "<!-- note -->\n<p>a &amp; b</p>"
    doc = parse_html(source)
    comment, newline, para = doc.children
    expect_equal(comment.data, " note ", label="comment data")
    expect_equal((comment.start, comment.end), (0, 13), label="comment span")
    expect_equal(newline.data, "\n", label="whitespace text")
    expect_equal(para.text_content(), "a & b", label="entity decoded")
    expect_equal((para.start, para.end), (14, len(source)), label="p span")


def test_doctype_is_kept_as_node() -> None:
    doc = parse_html("<!DOCTYPE html><html></html>")
    expect_length(doc.children, 2, label="top level")
    expect_equal(doc.children[0].node_type, "doctype", label="doctype")


def test_line_index_round_trips_offsets() -> None:
    index = LineIndex("ab\ncd\n\nef")
    expect_equal(index.offset(2, 1), 4, label="offset")
    expect_equal(index.position(4), (1, 1), label="position")
    expect_equal(index.position(6), (2, 0), label="empty line")
    expect_equal(index.position(0), (0, 0), label="origin")
