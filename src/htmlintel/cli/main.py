"""CLI entrypoint for scanning HTML documents for component definitions."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from htmlintel.analysis.analyzer import Analysis, Analyzer
from htmlintel.config.models import HtmlIntelConfig
from htmlintel.errors import ProblemError, log_problem, problem
from htmlintel.polymer.dom_module_scanner import DomModule
from htmlintel.storage.duckdb_client import DuckDBClient
from htmlintel.storage.writer import write_analysis

LOG = logging.getLogger("htmlintel.cli")

CommandHandler = Callable[[argparse.Namespace], int]

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


# ---------------------------------------------------------------------------
# Argument parsing / logging setup
# ---------------------------------------------------------------------------


def _setup_logging(verbosity: int) -> None:
    """
    Configure logging based on -v/--verbose count.

    0 -> WARNING, 1 -> INFO, 2+ -> DEBUG.
    """
    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="htmlintel",
        description="Extract <dom-module> component definitions from HTML documents.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_scan = subparsers.add_parser("scan", help="Print dom-modules found in the given files")
    p_scan.add_argument("files", nargs="+", type=Path, help="HTML files to scan")
    p_scan.set_defaults(func=_cmd_scan)

    p_analyze = subparsers.add_parser(
        "analyze",
        help="Analyze every HTML document under a repository",
    )
    p_analyze.add_argument(
        "--repo-root",
        type=Path,
        default=Path(),
        help="Path to the repository root (default: current directory)",
    )
    p_analyze.add_argument(
        "--repo",
        default=None,
        help="Repository slug stored with results (default: repo root directory name)",
    )
    p_analyze.add_argument(
        "--db-path",
        type=Path,
        default=None,
        help="Write results to this DuckDB database (relative to build/)",
    )
    p_analyze.set_defaults(func=_cmd_analyze)
    return parser


def _emit(payload: object) -> None:
    sys.stdout.write(json.dumps(payload, indent=2))
    sys.stdout.write("\n")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _summarize(analysis: Analysis) -> dict[str, Any]:
    dom_modules = [f for f in analysis.features if isinstance(f, DomModule)]
    return {
        "documents": len(analysis.documents),
        "dom_modules": len(dom_modules),
        "identifiers": sorted(i for module in dom_modules for i in module.identifiers),
        "warnings": [w.to_dict() for w in analysis.all_warnings()],
    }


def _cmd_scan(args: argparse.Namespace) -> int:
    analysis = Analyzer().analyze_files(args.files)
    payload = {
        url: [f.to_dict() for f in doc.features if isinstance(f, DomModule)]
        for url, doc in analysis.documents.items()
    }
    _emit(payload)
    failed = any(
        w.code in {"could-not-load", "could-not-scan"} for w in analysis.all_warnings()
    )
    return EXIT_FAILURE if failed else EXIT_OK


def _cmd_analyze(args: argparse.Namespace) -> int:
    overrides: dict[str, Any] = {"repo_root": args.repo_root, "repo": args.repo}
    if args.db_path is not None:
        overrides["db_path"] = args.db_path
    cfg = HtmlIntelConfig(**overrides)
    if not cfg.repo_root.is_dir():
        log_problem(
            LOG,
            problem(
                "config.repo_root_missing",
                "Repository root not found",
                f"{cfg.repo_root} is not a directory",
            ),
        )
        return EXIT_USAGE

    analysis = Analyzer(profile=cfg.scan_profile()).analyze_repo()
    summary = _summarize(analysis)
    if args.db_path is not None:
        with DuckDBClient(cfg.db_path) as con:
            written = write_analysis(con, analysis, repo=cfg.repo_slug)
        summary["db_path"] = str(cfg.db_path)
        summary["rows_written"] = written.dom_modules
    _emit(summary)
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run the CLI.

    Returns
    -------
    int
        Process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    handler: CommandHandler = args.func
    try:
        return handler(args)
    except ProblemError as exc:
        log_problem(LOG, exc.problem_detail)
        return EXIT_FAILURE
    except ValidationError as exc:
        log_problem(LOG, problem("config.invalid", "Invalid configuration", str(exc)))
        return EXIT_USAGE


if __name__ == "__main__":
    raise SystemExit(main())
