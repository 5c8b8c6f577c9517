"""Extract ``<dom-module>`` component definitions from parsed HTML."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Final

from htmlintel.html.document import ParsedHtmlDocument
from htmlintel.html.nodes import HtmlNode
from htmlintel.html.predicates import (
    get_attribute,
    get_template_content,
    has_attr,
    has_tag_name,
    query,
    query_all,
)
from htmlintel.html.scanner import VisitFunction
from htmlintel.model.comments import get_attached_comment_text
from htmlintel.model.feature import Slot
from htmlintel.model.source_range import SourceRange
from htmlintel.model.warning import Warning
from htmlintel.polymer.local_id import LocalId

log = logging.getLogger(__name__)

DOM_MODULE_KIND: Final = "dom-module"

is_dom_module = has_tag_name("dom-module")
is_template = has_tag_name("template")
is_slot = has_tag_name("slot")
has_id = has_attr("id")


class ScannedDomModule:
    """
    A ``<dom-module>`` as found during traversal, before model build.

    Only ``warnings`` may grow after construction; resolution snapshots it.
    """

    def __init__(  # noqa: PLR0913
        self,
        id: str | None,  # noqa: A002
        node: HtmlNode,
        source_range: SourceRange,
        ast_node: HtmlNode,
        comment: str | None,
        slots: list[Slot],
        local_ids: list[LocalId],
    ) -> None:
        self.id = id
        self.node = node
        self.source_range = source_range
        self.ast_node = ast_node
        self.comment = comment
        self.slots = slots
        self.local_ids = local_ids
        self.warnings: list[Warning] = []

    def resolve(self) -> DomModule:
        """
        Build the resolved feature from the current field values.

        Returns
        -------
        DomModule
            New resolved feature; the scanned record is left untouched.
        """
        return DomModule(
            node=self.node,
            id=self.id,
            comment=self.comment,
            source_range=self.source_range,
            ast_node=self.ast_node,
            warnings=tuple(self.warnings),
            slots=tuple(self.slots),
            local_ids=tuple(self.local_ids),
        )


@dataclass(frozen=True)
class DomModule:
    """Resolved ``<dom-module>`` feature exposed to the analysis model."""

    node: HtmlNode
    id: str | None
    comment: str | None
    source_range: SourceRange
    ast_node: HtmlNode
    warnings: tuple[Warning, ...]
    slots: tuple[Slot, ...]
    local_ids: tuple[LocalId, ...]
    kinds: frozenset[str] = field(default=frozenset({DOM_MODULE_KIND}), init=False)
    identifiers: frozenset[str] = field(default=frozenset(), init=False)

    def __post_init__(self) -> None:
        """Derive identifiers from the module id."""
        if self.id:
            object.__setattr__(self, "identifiers", frozenset({self.id}))

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize to a JSON-friendly dict (tree nodes omitted).

        Returns
        -------
        dict[str, Any]
            Feature payload.
        """
        return {
            "kind": DOM_MODULE_KIND,
            "id": self.id,
            "comment": self.comment,
            "source_range": self.source_range.to_dict(),
            "slots": [
                {"name": slot.name, "source_range": slot.source_range.to_dict()}
                for slot in self.slots
            ],
            "local_ids": [
                {"id": local.id, "source_range": local.source_range.to_dict()}
                for local in self.local_ids
            ],
            "warnings": [warning.to_dict() for warning in self.warnings],
        }


class DomModuleScanner:
    """HtmlScanner producing one ScannedDomModule per ``<dom-module>`` element."""

    async def scan(
        self,
        document: ParsedHtmlDocument,
        visit: VisitFunction,
    ) -> list[ScannedDomModule]:
        """
        Collect dom-modules in the order ``visit`` reaches them.

        Parameters
        ----------
        document
            Document the visited nodes belong to; used for source ranges.
        visit
            Traversal primitive calling its visitor once per node.

        Returns
        -------
        list[ScannedDomModule]
            Scanned records in document order.
        """
        dom_modules: list[ScannedDomModule] = []

        def _visitor(node: HtmlNode) -> None:
            if is_dom_module(node):
                dom_modules.append(_scan_dom_module(document, node))

        await visit(_visitor)
        log.debug("Found %d dom-module(s) in %s", len(dom_modules), document.url)
        return dom_modules


def _scan_dom_module(document: ParsedHtmlDocument, node: HtmlNode) -> ScannedDomModule:
    slots: list[Slot] = []
    local_ids: list[LocalId] = []
    template = query(node, is_template)
    if template is not None:
        content = get_template_content(template)
        slots = [
            Slot(get_attribute(slot, "name") or "", document.require_source_range(slot))
            for slot in query_all(content, is_slot)
        ]
        local_ids = [
            LocalId(get_attribute(element, "id") or "", document.require_source_range(element))
            for element in query_all(content, has_id)
        ]
    return ScannedDomModule(
        id=get_attribute(node, "id"),
        node=node,
        source_range=document.require_source_range(node),
        ast_node=node,
        comment=get_attached_comment_text(node),
        slots=slots,
        local_ids=local_ids,
    )
