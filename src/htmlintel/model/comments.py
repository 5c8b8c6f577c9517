"""Locate documentation comments attached to HTML nodes."""

from __future__ import annotations

import textwrap

from htmlintel.html.nodes import HtmlNode

LICENSE_MARKER = "@license"


def _is_visible(node: HtmlNode) -> bool:
    return not (node.is_text and not node.data.strip())


def get_attached_comment_node(node: HtmlNode) -> HtmlNode | None:
    """
    Find the comment immediately preceding ``node``, ignoring whitespace.

    A node that opens a template body inherits the comment preceding the
    template element itself.

    Returns
    -------
    HtmlNode | None
        The comment node, or None when the closest visible predecessor is
        something else.
    """
    current: HtmlNode | None = node
    while current is not None:
        predecessor = next(
            (sibling for sibling in current.previous_siblings() if _is_visible(sibling)), None
        )
        if predecessor is not None:
            return predecessor if predecessor.is_comment else None
        parent = current.parent
        current = parent.template_host if parent is not None else None
    return None


def unindent(text: str) -> str:
    """
    Strip the common indentation of a multi-line comment body.

    The first line is excluded from the common-indent computation since it
    usually starts right after ``<!--``. CRLF and lone CR line endings are
    normalised to LF first.

    Returns
    -------
    str
        Unindented text.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    first, _, rest = text.partition("\n")
    if not rest:
        return first.strip()
    return f"{first.strip()}\n{textwrap.dedent(rest)}"


def get_attached_comment_text(node: HtmlNode) -> str | None:
    """
    Return documentation text attached to ``node``.

    Returns
    -------
    str | None
        Unindented, stripped comment text; None when there is no attached
        comment, it is empty, or it is a license header.
    """
    comment = get_attached_comment_node(node)
    if comment is None:
        return None
    text = comment.text_content()
    if not text.strip() or LICENSE_MARKER in text:
        return None
    return unindent(text).strip()
