"""Pydantic v2 models for the scaffolding engine.

Declarations (``ComponentSpec``, ``SectionSpec``) are immutable once built;
``RenderedComponent`` and ``GeneratedComponent`` describe what the renderer
produced and what the materializer put on disk.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ComponentKind(str, Enum):
    """Buildable unit flavour. Libraries get a canary test, binaries an entry point."""
    LIBRARY = "library"
    BINARY = "binary"


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------

def _normalize_relative(value: str) -> str:
    path = PurePosixPath(value.strip().replace("\\", "/"))
    if not path.parts or str(path) == ".":
        raise ValueError("relative path must not be empty")
    if path.is_absolute() or ".." in path.parts:
        raise ValueError(f"path must stay inside the project root: {value!r}")
    return str(path)


class ComponentSpec(BaseModel):
    """A library or binary crate to generate and register as a workspace member."""

    model_config = ConfigDict(frozen=True)

    kind: ComponentKind
    relative_path: str = Field(..., description="POSIX path relative to the project root")

    @field_validator("relative_path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        return _normalize_relative(value)

    @property
    def display_name(self) -> str:
        """Final path segment, e.g. ``gatewayd`` for ``gateway/bin/gatewayd``."""
        return PurePosixPath(self.relative_path).name

    @classmethod
    def library(cls, relative_path: str) -> "ComponentSpec":
        return cls(kind=ComponentKind.LIBRARY, relative_path=relative_path)

    @classmethod
    def binary(cls, relative_path: str) -> "ComponentSpec":
        return cls(kind=ComponentKind.BINARY, relative_path=relative_path)


class StaticFile(BaseModel):
    """A non-component file rendered verbatim from a template."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Output path relative to the project root")
    template: str = Field(..., description="Template name under the templates directory")
    context: dict[str, Any] = Field(default_factory=dict)

    @field_validator("path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        return _normalize_relative(value)


class SectionSpec(BaseModel):
    """One logical block of the monorepo (gateway, contracts, CI, ...)."""

    model_config = ConfigDict(frozen=True)

    name: str
    components: tuple[ComponentSpec, ...] = ()
    keep_dirs: tuple[str, ...] = Field(
        default=(), description="Directories seeded with an empty .keep file"
    )
    files: tuple[StaticFile, ...] = ()

    @field_validator("keep_dirs")
    @classmethod
    def _check_keep_dirs(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(_normalize_relative(d) for d in value)


# ---------------------------------------------------------------------------
# Rendering / materialization results
# ---------------------------------------------------------------------------

class RenderedComponent(BaseModel):
    """The three files that make up a generated component."""

    model_config = ConfigDict(frozen=True)

    manifest_fragment: str
    readme: str
    source_stub: str
    source_path: str = Field(..., description="'src/lib.rs' or 'src/main.rs'")

    def files(self) -> dict[str, str]:
        """Ordered mapping of component-relative file path to content."""
        return {
            "Cargo.toml": self.manifest_fragment,
            "README.md": self.readme,
            self.source_path: self.source_stub,
        }


class GeneratedComponent(BaseModel):
    """A component directory as left on disk by the materializer."""

    spec: ComponentSpec
    path: Path
    written: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)

    @property
    def relative_path(self) -> str:
        return self.spec.relative_path


class ScaffoldResult(BaseModel):
    """Outcome of one ``ScaffoldPipeline.run``."""

    project_root: Path
    stage: str = Field(default="PREFLIGHT", description="Last stage entered")
    success: bool = False
    members: list[str] = Field(default_factory=list)
    files_written: int = 0
    files_skipped: int = 0
    vcs_initialized: bool = False
    warnings: list[str] = Field(default_factory=list)
    error: str | None = None
