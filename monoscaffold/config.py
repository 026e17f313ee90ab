"""monoscaffold configuration.

Typed settings for a scaffolding run.  Uses a Pydantic v2 model so values
coming from the CLI or the environment are validated once, up front, before
anything touches the filesystem.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_PROJECT_NAME = "lattice"
DEFAULT_COMMIT_MESSAGE = "chore: scaffold monorepo with placeholders"


class ScaffoldConfig(BaseModel):
    """Settings for one scaffolding run.

    Instances are created by the CLI entry point (or ``from_env``) and passed
    to ``ScaffoldPipeline``.
    """

    project_name: str = Field(
        default=DEFAULT_PROJECT_NAME,
        description="Name of the project directory created under output_dir",
    )
    output_dir: Path = Field(default=Path("."))
    required_tools: list[str] = Field(
        default_factory=lambda: ["cargo"],
        description="Executables that must be on PATH; a missing one aborts the run",
    )
    vcs_tool: str = Field(default="git", description="Optional version-control executable")
    init_vcs: bool = Field(default=True, description="Initialise a repository when done")
    commit_message: str = Field(default=DEFAULT_COMMIT_MESSAGE)
    manifest_template: Path | None = Field(
        default=None,
        description="Custom root manifest template (defaults to the bundled one)",
    )

    @field_validator("project_name")
    @classmethod
    def _single_path_segment(cls, value: str) -> str:
        value = value.strip()
        if not value or value in (".", ".."):
            raise ValueError("project name must not be empty")
        if "/" in value or "\\" in value:
            raise ValueError(f"project name must be a single directory name: {value!r}")
        return value

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    @property
    def project_root(self) -> Path:
        """Top-level directory of the generated monorepo."""
        return self.output_dir / self.project_name

    @property
    def root_manifest_path(self) -> Path:
        """Path of the assembled workspace manifest."""
        return self.project_root / "Cargo.toml"

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, **overrides: Any) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            SCAFFOLD_PROJECT_NAME, SCAFFOLD_OUTPUT_DIR, SCAFFOLD_REQUIRED_TOOLS
            (comma-separated), SCAFFOLD_NO_GIT, SCAFFOLD_MANIFEST_TEMPLATE.

        Keyword *overrides* whose value is not ``None`` take precedence.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SCAFFOLD_PROJECT_NAME"):
            kwargs["project_name"] = os.environ["SCAFFOLD_PROJECT_NAME"]
        if os.environ.get("SCAFFOLD_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["SCAFFOLD_OUTPUT_DIR"])
        if "SCAFFOLD_REQUIRED_TOOLS" in os.environ:
            tools = os.environ["SCAFFOLD_REQUIRED_TOOLS"]
            kwargs["required_tools"] = [t.strip() for t in tools.split(",") if t.strip()]
        if os.environ.get("SCAFFOLD_NO_GIT", "").lower() in ("1", "true", "yes"):
            kwargs["init_vcs"] = False
        if os.environ.get("SCAFFOLD_MANIFEST_TEMPLATE"):
            kwargs["manifest_template"] = Path(os.environ["SCAFFOLD_MANIFEST_TEMPLATE"])

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
