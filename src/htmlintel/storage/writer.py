"""Persist resolved dom-modules and their warnings into DuckDB."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import duckdb

from htmlintel.analysis.analyzer import Analysis
from htmlintel.errors import StorageError, problem
from htmlintel.model.source_range import SourceRange
from htmlintel.model.warning import Warning
from htmlintel.polymer.dom_module_scanner import DomModule
from htmlintel.storage.tables import TABLE_SCHEMAS

log = logging.getLogger(__name__)

Span = tuple[int | None, int | None, int | None, int | None]


@dataclass(frozen=True)
class WriteSummary:
    """Row counts inserted by a write."""

    documents: int
    dom_modules: int
    slots: int
    local_ids: int
    warnings: int


def _span(source_range: SourceRange | None) -> Span:
    if source_range is None:
        return (None, None, None, None)
    return (
        source_range.start.line,
        source_range.start.column,
        source_range.end.line,
        source_range.end.column,
    )


def _warning_row(repo: str, path: str, warning: Warning) -> tuple[object, ...]:
    return (
        repo,
        path,
        warning.code,
        warning.severity.value,
        warning.message,
        *_span(warning.source_range),
    )


def _insert(con: duckdb.DuckDBPyConnection, table_key: str, rows: list[tuple[object, ...]]) -> None:
    if not rows:
        return
    columns = TABLE_SCHEMAS[table_key].column_names()
    placeholders = ", ".join("?" for _ in columns)
    con.executemany(
        f"INSERT INTO {table_key} ({', '.join(columns)}) VALUES ({placeholders})",  # noqa: S608
        rows,
    )
    log.debug("Inserted %d row(s) into %s", len(rows), table_key)


def write_analysis(
    con: duckdb.DuckDBPyConnection,
    analysis: Analysis,
    *,
    repo: str,
) -> WriteSummary:
    """
    Replace stored rows for every analyzed document with the analysis results.

    Analysis-level warnings are stored against the path of the range they
    point at.

    Parameters
    ----------
    con
        Connection with schemas applied.
    analysis
        Analysis to persist.
    repo
        Repository slug used as the first key column.

    Returns
    -------
    WriteSummary
        Inserted row counts.

    Raises
    ------
    StorageError
        If DuckDB rejects a statement. Any failure rolls the transaction back
        before propagating.
    """
    modules: list[tuple[object, ...]] = []
    slots: list[tuple[object, ...]] = []
    local_ids: list[tuple[object, ...]] = []
    warnings: list[tuple[object, ...]] = []

    for path, doc in analysis.documents.items():
        warnings.extend(_warning_row(repo, path, w) for w in doc.warnings)
        dom_modules = [f for f in doc.features if isinstance(f, DomModule)]
        for module_index, module in enumerate(dom_modules):
            modules.append(
                (
                    repo,
                    path,
                    module_index,
                    module.id,
                    module.comment,
                    *_span(module.source_range),
                    len(module.slots),
                    len(module.local_ids),
                )
            )
            slots.extend(
                (repo, path, module_index, i, slot.name, *_span(slot.source_range))
                for i, slot in enumerate(module.slots)
            )
            local_ids.extend(
                (repo, path, module_index, i, local.id, *_span(local.source_range))
                for i, local in enumerate(module.local_ids)
            )
    for warning in analysis.warnings:
        path = warning.source_range.file if warning.source_range else ""
        warnings.append(_warning_row(repo, path, warning))

    paths = list(analysis.documents)
    try:
        con.execute("BEGIN TRANSACTION")
        _delete_existing(con, repo=repo, paths=paths)
        _insert(con, "core.dom_modules", modules)
        _insert(con, "core.dom_module_slots", slots)
        _insert(con, "core.dom_module_local_ids", local_ids)
        _insert(con, "core.feature_warnings", warnings)
        con.execute("COMMIT")
    except Exception as exc:
        con.execute("ROLLBACK")
        if not isinstance(exc, duckdb.Error):
            raise
        detail = problem(
            "storage.write_failed",
            "Failed to persist analysis",
            str(exc),
            context={"repo": repo, "documents": len(paths)},
        )
        raise StorageError(detail) from exc

    summary = WriteSummary(
        documents=len(paths),
        dom_modules=len(modules),
        slots=len(slots),
        local_ids=len(local_ids),
        warnings=len(warnings),
    )
    log.info(
        "Stored %d dom-module(s) from %d document(s) for %s",
        summary.dom_modules,
        summary.documents,
        repo,
    )
    return summary


def _delete_existing(con: duckdb.DuckDBPyConnection, *, repo: str, paths: Sequence[str]) -> None:
    """Remove stale rows for the documents about to be rewritten."""
    if not paths:
        return
    for table_key in TABLE_SCHEMAS:
        con.execute(
            f"DELETE FROM {table_key} "  # noqa: S608 - keys come from TABLE_SCHEMAS
            "WHERE repo = ? AND path IN (SELECT * FROM UNNEST(?))",
            [repo, list(paths)],
        )


def fetch_dom_modules(con: duckdb.DuckDBPyConnection, *, repo: str) -> list[dict[str, Any]]:
    """
    Read stored dom-modules for a repository.

    Returns
    -------
    list[dict[str, Any]]
        One dict per module, ordered by path then position.
    """
    columns = TABLE_SCHEMAS["core.dom_modules"].column_names()
    rows = con.execute(
        f"SELECT {', '.join(columns)} FROM core.dom_modules "  # noqa: S608
        "WHERE repo = ? ORDER BY path, module_index",
        [repo],
    ).fetchall()
    return [dict(zip(columns, row, strict=True)) for row in rows]
