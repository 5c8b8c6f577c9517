"""Read-write DuckDB connection for persisting an analysis run."""

from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType

import duckdb

from htmlintel.errors import StorageError, problem
from htmlintel.storage.schemas import assert_schema_alignment, ensure_schema

log = logging.getLogger(__name__)


class DuckDBClient:
    """
    Open ``db_path`` for writing, creating the result tables on first use.

    Used as a context manager around ``write_analysis``; the connection is
    closed on exit. A database whose tables have drifted is rejected before
    anything is written.
    """

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self._con: duckdb.DuckDBPyConnection | None = None

    def connect(self) -> duckdb.DuckDBPyConnection:
        """
        Return the open connection, opening and checking it on first call.

        Returns
        -------
        duckdb.DuckDBPyConnection
            Connection with the ``core`` tables in place.

        Raises
        ------
        StorageError
            If the file cannot be opened as a database or its tables drifted.
        """
        if self._con is not None:
            return self._con

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        log.info("Opening results database %s", self.db_path)
        try:
            con = duckdb.connect(str(self.db_path))
        except duckdb.Error as exc:
            raise StorageError(
                problem(
                    "storage.connect_failed",
                    "Results database could not be opened",
                    str(exc),
                    context={"db_path": str(self.db_path)},
                )
            ) from exc
        try:
            ensure_schema(con)
            assert_schema_alignment(con)
        except Exception:
            con.close()
            raise
        self._con = con
        return con

    def close(self) -> None:
        if self._con is not None:
            self._con.close()
            self._con = None

    def __enter__(self) -> duckdb.DuckDBPyConnection:
        return self.connect()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
