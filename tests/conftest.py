"""Shared pytest fixtures for the monoscaffold test suite.

Provides reusable fixtures for:
- Temporary output directories and configs
- A real TemplateRenderer over the bundled templates
- Tool-discovery stubs (everything present / selected tools missing)
- A mocked GitInitializer so no test spawns git
- Small section declarations for fast generator runs
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from monoscaffold.config import ScaffoldConfig
from monoscaffold.scaffolder.models import ComponentSpec, SectionSpec, StaticFile
from monoscaffold.scaffolder.templates import TemplateRenderer
from monoscaffold.vcs import GitInitializer


# ---------------------------------------------------------------------------
# Paths & config
# ---------------------------------------------------------------------------

@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Parent directory the project is generated into (auto-cleanup)."""
    out = tmp_path / "out"
    out.mkdir()
    return out


@pytest.fixture
def config(output_dir: Path) -> ScaffoldConfig:
    """Config for a project called ``demo`` with git bootstrap enabled."""
    return ScaffoldConfig(project_name="demo", output_dir=output_dir)


@pytest.fixture
def project_root(config: ScaffoldConfig) -> Path:
    return config.project_root


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

@pytest.fixture
def renderer() -> TemplateRenderer:
    """A renderer over the bundled templates."""
    return TemplateRenderer()


@pytest.fixture
def manifest_template(renderer: TemplateRenderer) -> str:
    """The bundled root Cargo.toml template, marker still in place."""
    return renderer.root_manifest_template({"project_name": "demo"})


# ---------------------------------------------------------------------------
# External collaborators
# ---------------------------------------------------------------------------

@pytest.fixture
def all_tools():
    """Tool checker that finds every executable."""
    return lambda name: True


@pytest.fixture
def tools_without():
    """Factory: tool checker that finds everything except *missing*."""

    def _factory(*missing: str):
        checker = MagicMock(side_effect=lambda name: name not in missing)
        return checker

    return _factory


@pytest.fixture
def mock_vcs() -> MagicMock:
    """A GitInitializer double: never a repository, initialize succeeds."""
    vcs = MagicMock(spec=GitInitializer)
    vcs.is_repository.return_value = False
    vcs.initialize = AsyncMock(return_value=None)
    return vcs


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------

@pytest.fixture
def gateway_pair() -> list[ComponentSpec]:
    """The two-component declaration: one library then one binary."""
    return [
        ComponentSpec.library("gateway/crates/core"),
        ComponentSpec.binary("gateway/bin/gatewayd"),
    ]


@pytest.fixture
def small_sections(gateway_pair: list[ComponentSpec]) -> list[SectionSpec]:
    """A gateway section plus component-free console and contracts sections."""
    return [
        SectionSpec(name="gateway", components=tuple(gateway_pair)),
        SectionSpec(
            name="console",
            keep_dirs=("console/app",),
            files=(StaticFile(path="console/README.md", template="console/README.md.j2"),),
        ),
        SectionSpec(
            name="contracts",
            files=(
                StaticFile(
                    path="contracts/openapi/v1/admin-api.yaml",
                    template="contracts/admin-api.yaml.j2",
                ),
            ),
        ),
    ]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def snapshot_tree(root: Path) -> dict[str, bytes]:
    """Map every file under *root* (excluding .git) to its bytes."""
    return {
        str(p.relative_to(root)): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file() and ".git" not in p.relative_to(root).parts
    }


@pytest.fixture
def snapshot():
    return snapshot_tree


@pytest.fixture
def mock_subprocess():
    """Factory for fake ``asyncio`` subprocesses.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
                ...
    """
    def factory(stdout: str = "", stderr: str = "", returncode: int = 0) -> AsyncMock:
        proc = AsyncMock()
        proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        proc.returncode = returncode
        proc.kill = MagicMock()
        return proc

    return factory
