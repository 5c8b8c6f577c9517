"""Table schema registry for persisted analysis results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ColumnType = Literal["INTEGER", "VARCHAR"]


@dataclass(frozen=True)
class Column:
    """Definition of a single table column."""

    name: str
    type: ColumnType
    nullable: bool = True
    description: str | None = None


@dataclass(frozen=True)
class TableSchema:
    """Schema definition for a DuckDB table."""

    schema: str
    name: str
    columns: list[Column]
    description: str | None = None

    def column_names(self) -> list[str]:
        """
        Ordered column names.

        Returns
        -------
        list[str]
            Column names in definition order.
        """
        return [col.name for col in self.columns]


def _span_columns() -> list[Column]:
    return [
        Column("start_line", "INTEGER", description="Zero-based start line"),
        Column("start_col", "INTEGER"),
        Column("end_line", "INTEGER"),
        Column("end_col", "INTEGER"),
    ]


_KEY_COLUMNS = [
    Column("repo", "VARCHAR", nullable=False, description="Repository slug"),
    Column("path", "VARCHAR", nullable=False, description="Document url relative to repo root"),
    Column("module_index", "INTEGER", nullable=False, description="Position in the document"),
]

TABLE_SCHEMAS: dict[str, TableSchema] = {
    "core.dom_modules": TableSchema(
        schema="core",
        name="dom_modules",
        columns=[
            *_KEY_COLUMNS,
            Column("module_id", "VARCHAR", description="Declared id; NULL when absent"),
            Column("comment", "VARCHAR"),
            *_span_columns(),
            Column("slot_count", "INTEGER", nullable=False),
            Column("local_id_count", "INTEGER", nullable=False),
        ],
        description="Resolved <dom-module> definitions",
    ),
    "core.dom_module_slots": TableSchema(
        schema="core",
        name="dom_module_slots",
        columns=[
            *_KEY_COLUMNS,
            Column("slot_index", "INTEGER", nullable=False),
            Column("name", "VARCHAR", nullable=False, description="Empty for unnamed slots"),
            *_span_columns(),
        ],
    ),
    "core.dom_module_local_ids": TableSchema(
        schema="core",
        name="dom_module_local_ids",
        columns=[
            *_KEY_COLUMNS,
            Column("local_index", "INTEGER", nullable=False),
            Column("local_id", "VARCHAR", nullable=False),
            *_span_columns(),
        ],
    ),
    "core.feature_warnings": TableSchema(
        schema="core",
        name="feature_warnings",
        columns=[
            Column("repo", "VARCHAR", nullable=False),
            Column("path", "VARCHAR", nullable=False),
            Column("code", "VARCHAR", nullable=False),
            Column("severity", "VARCHAR", nullable=False),
            Column("message", "VARCHAR", nullable=False),
            *_span_columns(),
        ],
        description="Warnings carried by resolved features and failed documents",
    ),
}
