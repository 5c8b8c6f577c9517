"""
Configuration models used by the htmlintel CLI and analyzer.

These Pydantic models normalize repository identity and filesystem layout so
the analyzer and storage layers can rely on absolute paths.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from htmlintel.ingestion.source_scanner import ScanProfile, default_html_profile, profile_from_env


class HtmlIntelConfig(BaseModel):
    """
    Filesystem layout and identity for a single analysis run.

      repo_root/
        build/
          db/htmlintel.duckdb
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    repo_root: Path = Field(..., description="Path to repository root")
    repo: str | None = Field(default=None, description="Repository slug, e.g. 'my-org/my-repo'")
    build_dir: Path = Field(
        default=Path("build"),
        description="Build directory (holds db/)",
    )
    db_path: Path = Field(
        default=Path("db/htmlintel.duckdb"),
        description="DuckDB database path, relative paths resolve against build_dir",
    )

    @field_validator("repo_root", "build_dir", "db_path", mode="before")
    @classmethod
    def _expand_user(cls, v: Path | str) -> Path:
        """
        Expand user home markers for path-like inputs.

        Returns
        -------
        Path
            Expanded pathlib object.
        """
        return Path(v).expanduser()

    @model_validator(mode="after")
    def _resolve_paths(self) -> HtmlIntelConfig:
        """
        Resolve relative paths against repo_root/build_dir.

        Returns
        -------
        HtmlIntelConfig
            Same instance with absolute paths.
        """
        repo_root = self.repo_root.resolve()
        build_dir = self.build_dir
        if not build_dir.is_absolute():
            build_dir = (repo_root / build_dir).resolve()
        db_path = self.db_path
        if not db_path.is_absolute():
            db_path = (build_dir / db_path).resolve()
        self.repo_root = repo_root
        self.build_dir = build_dir
        self.db_path = db_path
        return self

    @property
    def repo_slug(self) -> str:
        """Repository slug, defaulting to the repo root directory name."""
        return self.repo or self.repo_root.name

    def scan_profile(self) -> ScanProfile:
        """
        Build the HTML scan profile for this repository with env overrides.

        Returns
        -------
        ScanProfile
            Profile used to discover documents.
        """
        return profile_from_env(default_html_profile(self.repo_root))
