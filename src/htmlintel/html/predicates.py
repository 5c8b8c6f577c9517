"""Composable node predicates and tree queries."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from htmlintel.html.nodes import FRAGMENT, HtmlNode

Predicate = Callable[[HtmlNode], bool]

__all__ = [
    "AND",
    "NOT",
    "OR",
    "Predicate",
    "get_attribute",
    "get_template_content",
    "has_attr",
    "has_attr_value",
    "has_tag_name",
    "is_comment",
    "is_element",
    "query",
    "query_all",
    "walk_all",
]


def is_element(node: HtmlNode) -> bool:
    """Match element nodes."""
    return node.is_element


def is_comment(node: HtmlNode) -> bool:
    """Match comment nodes."""
    return node.is_comment


def has_tag_name(name: str) -> Predicate:
    """
    Match elements with the given tag name (case-insensitive).

    Returns
    -------
    Predicate
        Predicate over nodes.
    """
    wanted = name.lower()

    def _pred(node: HtmlNode) -> bool:
        return node.is_element and node.tag_name == wanted

    return _pred


def has_attr(name: str) -> Predicate:
    """
    Match elements carrying an attribute, whatever its value.

    Returns
    -------
    Predicate
        Predicate over nodes.
    """

    def _pred(node: HtmlNode) -> bool:
        return node.is_element and node.has_attribute(name)

    return _pred


def has_attr_value(name: str, value: str) -> Predicate:
    """
    Match elements whose attribute equals ``value``.

    Returns
    -------
    Predicate
        Predicate over nodes.
    """

    def _pred(node: HtmlNode) -> bool:
        return node.is_element and node.get_attribute(name) == value

    return _pred


def AND(*predicates: Predicate) -> Predicate:  # noqa: N802
    """
    Match when every predicate matches.

    Returns
    -------
    Predicate
        Conjunction of ``predicates``.
    """
    return lambda node: all(pred(node) for pred in predicates)


def OR(*predicates: Predicate) -> Predicate:  # noqa: N802
    """
    Match when any predicate matches.

    Returns
    -------
    Predicate
        Disjunction of ``predicates``.
    """
    return lambda node: any(pred(node) for pred in predicates)


def NOT(predicate: Predicate) -> Predicate:  # noqa: N802
    """
    Invert a predicate.

    Returns
    -------
    Predicate
        Negation of ``predicate``.
    """
    return lambda node: not predicate(node)


def get_attribute(node: HtmlNode, name: str) -> str | None:
    """
    Read an attribute value.

    Returns
    -------
    str | None
        Value, or None when absent or when ``node`` is not an element.
    """
    if not node.is_element:
        return None
    return node.get_attribute(name)


def get_template_content(template: HtmlNode) -> HtmlNode:
    """
    Return the content fragment holding a template's body.

    Template bodies are not ordinary children, so walking ``children`` of a
    ``<template>`` finds nothing; this accessor is the way in.

    Returns
    -------
    HtmlNode
        The ``fragment`` node; an empty detached fragment for non-templates.
    """
    if template.template_content is not None:
        return template.template_content
    return HtmlNode(FRAGMENT, template_host=template)


def walk_all(node: HtmlNode, *, include_templates: bool = False) -> Iterator[HtmlNode]:
    """
    Yield every descendant of ``node`` depth-first in document order.

    Parameters
    ----------
    node
        Root of the walk; not itself yielded.
    include_templates
        Also descend into template content fragments (after the template's
        own children, which are normally empty).

    Yields
    ------
    HtmlNode
        Descendant nodes.
    """
    stack: list[Iterator[HtmlNode]] = [iter(_child_nodes(node, include_templates))]
    while stack:
        child = next(stack[-1], None)
        if child is None:
            stack.pop()
            continue
        yield child
        stack.append(iter(_child_nodes(child, include_templates)))


def _child_nodes(node: HtmlNode, include_templates: bool) -> list[HtmlNode]:
    if include_templates and node.template_content is not None:
        return [*node.children, *node.template_content.children]
    return node.children


def query(node: HtmlNode, predicate: Predicate) -> HtmlNode | None:
    """
    Find the first descendant matching ``predicate``.

    Returns
    -------
    HtmlNode | None
        First match in document order, or None.
    """
    return next((child for child in walk_all(node) if predicate(child)), None)


def query_all(node: HtmlNode, predicate: Predicate) -> list[HtmlNode]:
    """
    Find every descendant matching ``predicate``.

    Returns
    -------
    list[HtmlNode]
        Matches in document order.
    """
    return [child for child in walk_all(node) if predicate(child)]
