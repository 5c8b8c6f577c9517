"""Run scanners over documents and build the cross-document feature model."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from htmlintel.errors import log_problem, problem
from htmlintel.html.document import HtmlVisitor, ParsedHtmlDocument
from htmlintel.html.scanner import HtmlScanner
from htmlintel.ingestion.source_scanner import ScanProfile, SourceScanner
from htmlintel.model.feature import Feature, Resolvable
from htmlintel.model.warning import Severity, Warning
from htmlintel.polymer.dom_module_scanner import DOM_MODULE_KIND, DomModuleScanner, ScannedDomModule

log = logging.getLogger(__name__)


def default_scanners() -> list[HtmlScanner]:
    """
    Scanners registered when none are supplied.

    Returns
    -------
    list[HtmlScanner]
        Fresh scanner instances.
    """
    return [DomModuleScanner()]


@dataclass(frozen=True)
class DocumentAnalysis:
    """Resolved features and warnings for one document."""

    url: str
    features: tuple[Feature, ...]
    warnings: tuple[Warning, ...]


class Analysis:
    """Features from many documents indexed by kind and identifier."""

    def __init__(
        self,
        documents: Iterable[DocumentAnalysis],
        warnings: Iterable[Warning] = (),
    ) -> None:
        self.documents: dict[str, DocumentAnalysis] = {doc.url: doc for doc in documents}
        self.warnings: tuple[Warning, ...] = tuple(warnings)
        self._by_kind: dict[str, list[Feature]] = defaultdict(list)
        self._by_identifier: dict[tuple[str, str], list[Feature]] = defaultdict(list)
        for feature in self.features:
            for kind in feature.kinds:
                self._by_kind[kind].append(feature)
                for identifier in feature.identifiers:
                    self._by_identifier[kind, identifier].append(feature)

    @property
    def features(self) -> list[Feature]:
        """All features in document, then discovery, order."""
        return [feature for doc in self.documents.values() for feature in doc.features]

    def get_features(
        self,
        *,
        kind: str | None = None,
        identifier: str | None = None,
    ) -> list[Feature]:
        """
        Look up features by kind and/or identifier.

        Parameters
        ----------
        kind
            Feature kind such as ``dom-module``; None matches every kind.
        identifier
            Identifier the feature must declare; None matches any.

        Returns
        -------
        list[Feature]
            Matching features in discovery order.
        """
        if kind is not None and identifier is not None:
            return list(self._by_identifier.get((kind, identifier), ()))
        if kind is not None:
            return list(self._by_kind.get(kind, ()))
        if identifier is not None:
            return [f for f in self.features if identifier in f.identifiers]
        return self.features

    def all_warnings(self) -> list[Warning]:
        """
        Collect document-level and analysis-level warnings.

        Returns
        -------
        list[Warning]
            Warnings per document in order, then cross-document warnings.
        """
        collected = [w for doc in self.documents.values() for w in doc.warnings]
        collected.extend(self.warnings)
        return collected


async def scan_document(
    document: ParsedHtmlDocument,
    scanners: Sequence[HtmlScanner],
) -> list[Resolvable]:
    """
    Run every scanner over ``document``.

    Returns
    -------
    list[Resolvable]
        Scanned features grouped by scanner, each group in document order.
    """

    async def _visit(visitor: HtmlVisitor) -> None:
        await document.visit([visitor])

    scanned: list[Resolvable] = []
    for scanner in scanners:
        scanned.extend(await scanner.scan(document, _visit))
    return scanned


def _annotate_dom_modules(records: Iterable[ScannedDomModule]) -> None:
    first_by_id: dict[str, ScannedDomModule] = {}
    for record in records:
        if not record.id:
            record.warnings.append(
                Warning(
                    code="dom-module-missing-id",
                    message="<dom-module> has no id and cannot be referenced",
                    severity=Severity.INFO,
                    source_range=record.source_range,
                )
            )
            continue
        first = first_by_id.setdefault(record.id, record)
        if first is not record:
            line = first.source_range.start.line + 1
            record.warnings.append(
                Warning(
                    code="dom-module-duplicate-id",
                    message=f"dom-module id '{record.id}' is already defined on line {line}",
                    source_range=record.source_range,
                )
            )


def resolve_document(url: str, scanned: Sequence[Resolvable]) -> DocumentAnalysis:
    """
    Attach model-build warnings, then resolve each scanned feature once.

    Returns
    -------
    DocumentAnalysis
        Resolved features and their warnings.
    """
    _annotate_dom_modules(r for r in scanned if isinstance(r, ScannedDomModule))
    features = tuple(record.resolve() for record in scanned)
    warnings = tuple(w for feature in features for w in feature.warnings)
    return DocumentAnalysis(url=url, features=features, warnings=warnings)


async def analyze_document(
    document: ParsedHtmlDocument,
    scanners: Sequence[HtmlScanner],
) -> DocumentAnalysis:
    """
    Scan and resolve a single document.

    Returns
    -------
    DocumentAnalysis
        Resolved features for ``document``.
    """
    scanned = await scan_document(document, scanners)
    analysis = resolve_document(document.url, scanned)
    log.debug("Resolved %d feature(s) in %s", len(analysis.features), document.url)
    return analysis


def _duplicate_identifier_warnings(documents: Iterable[DocumentAnalysis]) -> list[Warning]:
    urls_by_id: dict[str, list[str]] = defaultdict(list)
    first_feature: dict[str, Feature] = {}
    for doc in documents:
        for feature in doc.features:
            if DOM_MODULE_KIND not in feature.kinds:
                continue
            for identifier in feature.identifiers:
                if doc.url not in urls_by_id[identifier]:
                    urls_by_id[identifier].append(doc.url)
                first_feature.setdefault(identifier, feature)
    return [
        Warning(
            code="dom-module-duplicate-id",
            message=f"dom-module id '{identifier}' is defined in {', '.join(urls)}",
            source_range=first_feature[identifier].source_range,
        )
        for identifier, urls in urls_by_id.items()
        if len(urls) > 1
    ]


class Analyzer:
    """Entry point tying document loading, scanning, and model build together."""

    def __init__(
        self,
        scanners: Sequence[HtmlScanner] | None = None,
        profile: ScanProfile | None = None,
    ) -> None:
        self.scanners: list[HtmlScanner] = (
            list(scanners) if scanners is not None else default_scanners()
        )
        self.profile = profile

    def analyze_text(self, url: str, contents: str) -> DocumentAnalysis:
        """
        Analyze markup held in memory.

        Returns
        -------
        DocumentAnalysis
            Resolved features for the document.
        """
        document = ParsedHtmlDocument.from_text(url, contents)
        return asyncio.run(analyze_document(document, self.scanners))

    def analyze_file(self, path: Path, root: Path | None = None) -> DocumentAnalysis:
        """
        Analyze a single file; a read or scan failure becomes an ERROR warning.

        Returns
        -------
        DocumentAnalysis
            Resolved features for the document.
        """
        return asyncio.run(self._analyze_path(path, root))

    def analyze_files(self, paths: Iterable[Path], root: Path | None = None) -> Analysis:
        """
        Analyze files; failures are logged and recorded per document.

        Parameters
        ----------
        paths
            Files to analyze, in the order they should appear in the model.
        root
            Directory document urls are made relative to.

        Returns
        -------
        Analysis
            Model over every document, including failed ones.
        """
        return asyncio.run(self._analyze_paths(list(paths), root))

    def analyze_repo(self) -> Analysis:
        """
        Analyze every document selected by the configured scan profile.

        Returns
        -------
        Analysis
            Model over the repository.

        Raises
        ------
        ValueError
            If the analyzer was created without a scan profile.
        """
        if self.profile is None:
            message = "analyze_repo requires a ScanProfile"
            raise ValueError(message)
        paths = list(SourceScanner(self.profile).iter_files())
        log.info("Analyzing %d HTML document(s) under %s", len(paths), self.profile.repo_root)
        return self.analyze_files(paths, root=self.profile.repo_root)

    async def _analyze_paths(self, paths: Sequence[Path], root: Path | None) -> Analysis:
        documents = [await self._analyze_path(path, root) for path in paths]
        return Analysis(documents, _duplicate_identifier_warnings(documents))

    async def _analyze_path(self, path: Path, root: Path | None) -> DocumentAnalysis:
        url = path.relative_to(root).as_posix() if root is not None else path.as_posix()
        try:
            document = ParsedHtmlDocument.from_path(path, root)
        except (OSError, UnicodeDecodeError) as exc:
            return _failed_document(url, "could-not-load", "Document could not be read", exc)
        try:
            return await analyze_document(document, self.scanners)
        except Exception as exc:  # noqa: BLE001
            return _failed_document(url, "could-not-scan", "Document scan failed", exc)


def _failed_document(url: str, code: str, title: str, exc: BaseException) -> DocumentAnalysis:
    detail = problem(
        f"scan.{code}",
        title,
        f"{url}: {exc}",
        context={"url": url, "error_type": type(exc).__name__},
    )
    log_problem(log, detail)
    warning = Warning(code=code, message=f"{title}: {exc}", severity=Severity.ERROR)
    return DocumentAnalysis(url=url, features=(), warnings=(warning,))
