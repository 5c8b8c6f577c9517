"""Create the ``core`` result tables and detect drift in existing databases."""

from __future__ import annotations

import logging

from duckdb import DuckDBPyConnection

from htmlintel.errors import StorageError, problem
from htmlintel.storage.tables import TABLE_SCHEMAS, TableSchema

SCHEMA = "core"
log = logging.getLogger(__name__)

LiveColumns = list[tuple[str, str]]


def _quote(identifier: str) -> str:
    escaped = identifier.replace('"', '""')
    return f'"{escaped}"'


def table_ddl(table: TableSchema) -> str:
    """
    Render ``CREATE TABLE IF NOT EXISTS`` for one result table.

    Returns
    -------
    str
        DDL statement; existing tables and their rows are left alone.
    """
    cols_sql = ",\n".join(
        f"    {_quote(col.name)} {col.type}{'' if col.nullable else ' NOT NULL'}"
        for col in table.columns
    )
    name = f"{_quote(table.schema)}.{_quote(table.name)}"
    return f"CREATE TABLE IF NOT EXISTS {name} (\n{cols_sql}\n);"


def ensure_schema(con: DuckDBPyConnection) -> None:
    """Create the ``core`` schema and any missing result tables."""
    con.execute(f"CREATE SCHEMA IF NOT EXISTS {_quote(SCHEMA)};")
    for table in TABLE_SCHEMAS.values():
        con.execute(table_ddl(table))


def _live_columns(con: DuckDBPyConnection) -> dict[str, LiveColumns]:
    rows = con.execute(
        """
        SELECT table_name, column_name, data_type
        FROM information_schema.columns
        WHERE table_schema = ?
        ORDER BY table_name, ordinal_position
        """,
        [SCHEMA],
    ).fetchall()
    live: dict[str, LiveColumns] = {}
    for table_name, column_name, data_type in rows:
        live.setdefault(f"{SCHEMA}.{table_name}", []).append((column_name, data_type))
    return live


def schema_drift(con: DuckDBPyConnection) -> list[str]:
    """
    Compare live result tables against TABLE_SCHEMAS by column name and type.

    Returns
    -------
    list[str]
        One message per drifted table; empty when aligned.
    """
    live = _live_columns(con)
    issues: list[str] = []
    for key, table in TABLE_SCHEMAS.items():
        expected = [(col.name, col.type) for col in table.columns]
        actual = live.get(key)
        if actual is None:
            issues.append(f"{key}: table missing")
        elif actual != expected:
            issues.append(f"{key}: expected {expected} got {actual}")
    return issues


def assert_schema_alignment(con: DuckDBPyConnection) -> None:
    """
    Refuse to write into a database whose result tables have drifted.

    Raises
    ------
    StorageError
        If any table is missing or its columns differ from TABLE_SCHEMAS.
    """
    issues = schema_drift(con)
    if not issues:
        return
    log.error("Schema drift detected: %s", "; ".join(issues))
    raise StorageError(
        problem(
            "storage.schema_drift",
            "Result tables do not match the expected schema",
            "; ".join(issues),
            context={"tables": [issue.split(":", 1)[0] for issue in issues]},
        )
    )
