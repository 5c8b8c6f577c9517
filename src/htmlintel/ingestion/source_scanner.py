"""Discover HTML documents under a repository with progress logging."""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Final

log = logging.getLogger(__name__)

DEFAULT_IGNORE_DIRS: Final[tuple[str, ...]] = (
    ".git",
    ".hg",
    ".idea",
    ".svn",
    ".tox",
    ".venv",
    ".vscode",
    "__pycache__",
    "bower_components",
    "build",
    "dist",
    "node_modules",
    "venv",
)

DEFAULT_INCLUDE_GLOBS: Final[tuple[str, ...]] = ("**/*.html",)


@dataclass(frozen=True)
class ScanProfile:
    """Description of which files under a repository to analyze."""

    repo_root: Path
    source_roots: tuple[Path, ...]
    include_globs: tuple[str, ...] = DEFAULT_INCLUDE_GLOBS
    ignore_dirs: tuple[str, ...] = DEFAULT_IGNORE_DIRS
    log_every: int = 250
    log_interval: float = 5.0


def default_html_profile(repo_root: Path) -> ScanProfile:
    """
    Build the default profile for HTML documents across the repository.

    Returns
    -------
    ScanProfile
        Profile scanning ``**/*.html`` from the repository root.
    """
    return ScanProfile(repo_root=repo_root, source_roots=(repo_root,))


def _split_env_list(raw: str) -> tuple[str, ...]:
    """Split comma/semicolon separated env values into a tuple of entries."""
    normalized = raw.replace(";", ",")
    return tuple(entry.strip() for entry in normalized.split(",") if entry.strip())


def profile_from_env(base: ScanProfile) -> ScanProfile:
    """
    Apply HTMLINTEL_INCLUDE_PATTERNS and HTMLINTEL_IGNORE_DIRS to a base profile.

    Include patterns replace the base globs; ignore dirs extend the base list.

    Returns
    -------
    ScanProfile
        Updated profile with environment overrides applied.
    """
    include = base.include_globs
    ignore = list(base.ignore_dirs)

    raw_include = os.getenv("HTMLINTEL_INCLUDE_PATTERNS")
    if raw_include:
        include = _split_env_list(raw_include)

    raw_ignore = os.getenv("HTMLINTEL_IGNORE_DIRS")
    if raw_ignore:
        seen = set(ignore)
        for entry in _split_env_list(raw_ignore):
            if entry not in seen:
                ignore.append(entry)
                seen.add(entry)

    return replace(base, include_globs=include, ignore_dirs=tuple(ignore))


class SourceScanner:
    """Reusable scanner for repository files with progress logging."""

    def __init__(self, profile: ScanProfile) -> None:
        self.profile = profile

    def iter_files(self) -> Iterator[Path]:
        """
        Yield files matching include globs while respecting ignored directories.

        Files are yielded in sorted order within each directory so repeated
        runs see the same sequence.

        Yields
        ------
        Path
            Paths to files that satisfy the scan profile.
        """
        ignore_set = set(self.profile.ignore_dirs)
        yielded = 0
        start_ts = time.perf_counter()
        last_log = start_ts

        for root in self.profile.source_roots:
            if not root.is_dir():
                log.warning("Skipping missing source root %s", root)
                continue
            for dirpath, dirnames, filenames in os.walk(root):
                dirnames[:] = sorted(name for name in dirnames if name not in ignore_set)
                for name in sorted(filenames):
                    path = Path(dirpath) / name
                    if not _matches_any_glob(path, self.profile.include_globs):
                        continue
                    yielded += 1
                    now_ts = time.perf_counter()
                    if yielded % self.profile.log_every == 0 or (
                        now_ts - last_log
                    ) >= self.profile.log_interval:
                        log.info(
                            "Source scan %d files (%.2fs elapsed)", yielded, now_ts - start_ts
                        )
                        last_log = now_ts
                    yield path


def _matches_any_glob(path: Path, patterns: Iterable[str]) -> bool:
    # Path.match treats "**/" as at least one directory; also try the bare name.
    return any(
        path.match(pattern) or path.match(pattern.removeprefix("**/")) for pattern in patterns
    )
