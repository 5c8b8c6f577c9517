"""Problem records for failures reported while analyzing HTML sources."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

PROBLEM_TYPE_BASE = "https://problems.htmlintel.dev/"


@dataclass(frozen=True)
class ProblemDetail:
    """
    One failure, shaped after RFC 9457 so it can be logged as a single JSON line.

    ``code`` is dotted, e.g. ``scan.could-not-load`` or ``storage.write_failed``;
    the problem ``type`` URI is derived from it.
    """

    code: str
    title: str
    detail: str
    context: dict[str, Any] = field(default_factory=dict)
    problem_id: str = field(default_factory=lambda: uuid4().hex)

    @property
    def type(self) -> str:
        return f"{PROBLEM_TYPE_BASE}{self.code}"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": self.type,
            "code": self.code,
            "title": self.title,
            "detail": self.detail,
            "problem_id": self.problem_id,
        }
        if self.context:
            payload["context"] = dict(self.context)
        return payload


def problem(
    code: str,
    title: str,
    detail: str,
    *,
    context: dict[str, Any] | None = None,
) -> ProblemDetail:
    """
    Build a ProblemDetail.

    Parameters
    ----------
    code
        Dotted problem code.
    title
        Short summary shared by every problem with this code.
    detail
        Occurrence-specific message, usually naming the document.
    context
        Extra keys such as ``url`` or ``repo`` for log search.

    Returns
    -------
    ProblemDetail
        Problem with a fresh ``problem_id``.
    """
    return ProblemDetail(code=code, title=title, detail=detail, context=context or {})


def log_problem(logger: logging.Logger, detail: ProblemDetail) -> None:
    """Log ``detail`` at ERROR as one JSON object."""
    logger.error("%s", json.dumps(detail.to_dict(), sort_keys=True))


class ProblemError(Exception):
    """Fatal failure carrying the ProblemDetail the CLI logs before exiting."""

    def __init__(self, detail: ProblemDetail) -> None:
        super().__init__(f"{detail.title}: {detail.detail}")
        self.problem_detail = detail


class StorageError(ProblemError):
    """Writing analysis results to DuckDB failed; the transaction was rolled back."""
