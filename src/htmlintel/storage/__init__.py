"""DuckDB persistence for analysis results."""

from htmlintel.storage.duckdb_client import DuckDBClient
from htmlintel.storage.schemas import assert_schema_alignment, ensure_schema, schema_drift
from htmlintel.storage.tables import TABLE_SCHEMAS
from htmlintel.storage.writer import WriteSummary, fetch_dom_modules, write_analysis

__all__ = [
    "TABLE_SCHEMAS",
    "DuckDBClient",
    "WriteSummary",
    "assert_schema_alignment",
    "ensure_schema",
    "fetch_dom_modules",
    "schema_drift",
    "write_analysis",
]
