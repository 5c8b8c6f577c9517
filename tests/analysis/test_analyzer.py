"""Analyzer model build, indexing, and per-document failure isolation."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest

from htmlintel.analysis.analyzer import Analyzer
from htmlintel.html.document import ParsedHtmlDocument
from htmlintel.html.nodes import HtmlNode
from htmlintel.html.scanner import VisitFunction
from htmlintel.ingestion.source_scanner import default_html_profile
from htmlintel.model.feature import Resolvable
from htmlintel.polymer.dom_module_scanner import DomModule, DomModuleScanner
from tests._helpers.expect import expect_equal, expect_in, expect_length, expect_true


class _ExplodingScanner:
    """Scanner whose traversal always fails."""

    async def scan(
        self,
        document: ParsedHtmlDocument,
        visit: VisitFunction,
    ) -> Sequence[Resolvable]:
        def _boom(node: HtmlNode) -> None:
            message = f"cannot scan {document.url}"
            raise RuntimeError(message)

        await visit(_boom)
        return []


def test_analyze_text_resolves_dom_modules() -> None:
    result = Analyzer().analyze_text(
        "one.html",
        '<dom-module id="a"><template><slot></slot></template></dom-module>',
    )
    (feature,) = result.features
    expect_true(isinstance(feature, DomModule), message="feature should be a DomModule")
    expect_equal(result.url, "one.html", label="url")
    expect_equal(result.warnings, (), label="warnings")


def test_duplicate_and_missing_ids_are_warned_before_resolution() -> None:
    result = Analyzer().analyze_text(
        "dupes.html",
        '<dom-module id="a"></dom-module>\n'
        '<dom-module id="a"></dom-module>\n'
        "<dom-module></dom-module>",
    )
    first, second, anonymous = result.features
    expect_equal(first.warnings, (), label="first warnings")
    expect_equal([w.code for w in second.warnings], ["dom-module-duplicate-id"], label="second")
    expect_in("line 1", second.warnings[0].message, label="points at first definition")
    expect_equal([w.code for w in anonymous.warnings], ["dom-module-missing-id"], label="anon")
    expect_length(result.warnings, 2, label="document warnings")


def test_analyze_repo_indexes_features_across_documents(html_repo: Path) -> None:
    analysis = Analyzer(profile=default_html_profile(html_repo)).analyze_repo()

    expect_equal(
        list(analysis.documents),
        ["index.html", "elements/a-el.html", "elements/b-el.html"],
        label="documents (top-down walk)",
    )
    expect_length(analysis.get_features(kind="dom-module"), 3, label="dom-modules")
    a_modules = analysis.get_features(kind="dom-module", identifier="a-el")
    expect_equal(
        [f.source_range.file for f in a_modules if f.source_range],
        ["elements/a-el.html", "elements/b-el.html"],
        label="a-el definitions",
    )
    expect_length(analysis.get_features(identifier="b-el"), 1, label="b-el by identifier")
    expect_equal(analysis.get_features(kind="unknown"), [], label="unknown kind")
    expect_length(analysis.get_features(), 3, label="all features")

    (cross,) = analysis.warnings
    expect_equal(cross.code, "dom-module-duplicate-id", label="cross-document warning")
    expect_in("elements/b-el.html", cross.message, label="names both files")


def test_a_el_details_survive_into_model(html_repo: Path) -> None:
    analysis = Analyzer(profile=default_html_profile(html_repo)).analyze_repo()
    (a_el,) = [
        f
        for f in analysis.get_features(kind="dom-module", identifier="a-el")
        if f.source_range and f.source_range.file == "elements/a-el.html"
    ]
    expect_true(isinstance(a_el, DomModule), message="DomModule expected")
    if isinstance(a_el, DomModule):
        expect_equal(a_el.comment, "The A element.", label="comment")
        expect_equal([s.name for s in a_el.slots], ["content"], label="slots")
        expect_equal([loc.id for loc in a_el.local_ids], ["box"], label="local ids")


def test_unreadable_document_is_recorded_and_others_continue(tmp_path: Path) -> None:
    good = tmp_path / "good.html"
    good.write_text('<dom-module id="g"></dom-module>', encoding="utf-8")
    missing = tmp_path / "missing.html"

    analysis = Analyzer().analyze_files([missing, good], root=tmp_path)

    expect_equal(
        [w.code for w in analysis.documents["missing.html"].warnings],
        ["could-not-load"],
        label="missing warnings",
    )
    expect_length(analysis.documents["good.html"].features, 1, label="good features")


def test_analyze_file_uses_root_relative_url(tmp_path: Path) -> None:
    path = tmp_path / "sub" / "one.html"
    path.parent.mkdir()
    path.write_text('<dom-module id="one"></dom-module>', encoding="utf-8")

    result = Analyzer().analyze_file(path, root=tmp_path)

    expect_equal(result.url, "sub/one.html", label="url")
    expect_equal([f.identifiers for f in result.features], [frozenset({"one"})], label="ids")


def test_failing_scanner_is_isolated_per_document(tmp_path: Path) -> None:
    path = tmp_path / "x.html"
    path.write_text('<dom-module id="x"></dom-module>', encoding="utf-8")

    analysis = Analyzer(scanners=[_ExplodingScanner()]).analyze_files([path], root=tmp_path)

    (warning,) = analysis.all_warnings()
    expect_equal(warning.code, "could-not-scan", label="code")
    expect_in("cannot scan x.html", warning.message, label="message")


def test_scanners_run_in_registration_order() -> None:
    result = Analyzer(scanners=[DomModuleScanner(), DomModuleScanner()]).analyze_text(
        "twice.html", '<dom-module id="t"></dom-module>'
    )
    expect_length(result.features, 2, label="features")


def test_analyze_repo_requires_profile() -> None:
    with pytest.raises(ValueError, match="ScanProfile"):
        Analyzer().analyze_repo()
