"""Tests for FilesystemMaterializer.

Covers:
- Directory creation with parents
- Skip-if-exists policy (user edits survive)
- Root-manifest rewrite only when content changes
- .keep placeholders
- OSError wrapping into MaterializationError
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from monoscaffold.errors import MaterializationError, ScaffoldError
from monoscaffold.scaffolder.materializer import FilesystemMaterializer
from monoscaffold.scaffolder.models import ComponentKind, ComponentSpec


pytestmark = pytest.mark.unit


@pytest.fixture
def materializer(tmp_path: Path) -> FilesystemMaterializer:
    return FilesystemMaterializer(tmp_path / "proj")


class TestWriteIfAbsent:
    @pytest.mark.asyncio
    async def test_creates_parents(self, materializer):
        assert await materializer.write_if_absent("a/b/c.txt", "hello\n") is True
        assert (materializer.root / "a/b/c.txt").read_text() == "hello\n"
        assert materializer.written == ["a/b/c.txt"]

    @pytest.mark.asyncio
    async def test_existing_file_is_preserved(self, materializer):
        target = materializer.root / "notes.md"
        target.parent.mkdir(parents=True)
        target.write_text("my edits\n")

        assert await materializer.write_if_absent("notes.md", "template\n") is False
        assert target.read_text() == "my edits\n"
        assert materializer.skipped == ["notes.md"]
        assert materializer.written == []

    @pytest.mark.asyncio
    async def test_empty_content(self, materializer):
        await materializer.write_if_absent("x/.keep", "")
        assert (materializer.root / "x/.keep").read_bytes() == b""

    @pytest.mark.asyncio
    async def test_oserror_is_wrapped(self, materializer):
        with patch(
            "monoscaffold.scaffolder.materializer._write_new_file",
            side_effect=PermissionError(13, "Permission denied"),
        ):
            with pytest.raises(MaterializationError) as exc_info:
                await materializer.write_if_absent("locked.txt", "x")

        err = exc_info.value
        assert isinstance(err, ScaffoldError)
        assert err.path == materializer.root / "locked.txt"
        assert err.reason == "Permission denied"
        assert err.stage == "DECLARING"

    @pytest.mark.asyncio
    @pytest.mark.skipif(
        hasattr(os, "geteuid") and os.geteuid() == 0,
        reason="root ignores directory permissions",
    )
    async def test_read_only_directory(self, materializer):
        materializer.root.mkdir(parents=True)
        materializer.root.chmod(0o500)
        try:
            with pytest.raises(MaterializationError):
                await materializer.write_if_absent("blocked.txt", "x")
        finally:
            materializer.root.chmod(0o700)


class TestWriteFile:
    @pytest.mark.asyncio
    async def test_writes_new(self, materializer):
        assert await materializer.write_file("Cargo.toml", "a\n") is True
        assert (materializer.root / "Cargo.toml").read_text() == "a\n"

    @pytest.mark.asyncio
    async def test_identical_content_is_noop(self, materializer):
        await materializer.write_file("Cargo.toml", "a\n")
        assert await materializer.write_file("Cargo.toml", "a\n") is False
        assert materializer.skipped == ["Cargo.toml"]

    @pytest.mark.asyncio
    async def test_different_content_replaces(self, materializer):
        await materializer.write_file("Cargo.toml", "a\n")
        assert await materializer.write_file("Cargo.toml", "b\n") is True
        assert (materializer.root / "Cargo.toml").read_text() == "b\n"

    @pytest.mark.asyncio
    async def test_replaces_non_utf8_file(self, materializer):
        target = materializer.root / "Cargo.toml"
        target.parent.mkdir(parents=True)
        target.write_bytes(b"\xff\xfe garbage")

        assert await materializer.write_file("Cargo.toml", "[workspace]\n") is True
        assert target.read_bytes() == b"[workspace]\n"

    @pytest.mark.asyncio
    async def test_error_carries_stage(self, materializer):
        with patch(
            "monoscaffold.scaffolder.materializer._replace_file",
            side_effect=OSError(28, "No space left on device"),
        ):
            with pytest.raises(MaterializationError) as exc_info:
                await materializer.write_file("Cargo.toml", "x")
        assert exc_info.value.stage == "ASSEMBLING"


class TestKeepAndDirs:
    @pytest.mark.asyncio
    async def test_touch_keep(self, materializer):
        assert await materializer.touch_keep("docs/runbooks") is True
        assert (materializer.root / "docs/runbooks/.keep").is_file()
        assert await materializer.touch_keep("docs/runbooks") is False

    @pytest.mark.asyncio
    async def test_ensure_dir_wraps_errors(self, materializer):
        with patch("pathlib.Path.mkdir", side_effect=OSError(30, "Read-only file system")):
            with pytest.raises(MaterializationError, match="Read-only file system"):
                await materializer.ensure_dir("anything")


class TestMaterialize:
    @pytest.mark.asyncio
    async def test_component_layout(self, materializer, renderer):
        spec = ComponentSpec.library("gateway/crates/core")
        rendered = renderer.render_component(spec.kind, spec.relative_path, spec.display_name)

        generated = await materializer.materialize(spec, rendered)

        base = materializer.root / "gateway/crates/core"
        assert generated.path == base
        assert generated.relative_path == "gateway/crates/core"
        assert generated.written == ["Cargo.toml", "README.md", "src/lib.rs"]
        assert (base / "Cargo.toml").read_text() == rendered.manifest_fragment
        assert (base / "README.md").read_text() == rendered.readme
        assert (base / "src/lib.rs").read_text() == rendered.source_stub

    @pytest.mark.asyncio
    async def test_rerun_skips_everything(self, materializer, renderer):
        spec = ComponentSpec.binary("gateway/bin/gatewayd")
        rendered = renderer.render_component(
            ComponentKind.BINARY, spec.relative_path, spec.display_name
        )
        await materializer.materialize(spec, rendered)

        main_rs = materializer.root / "gateway/bin/gatewayd/src/main.rs"
        main_rs.write_text("fn main() { /* mine */ }\n")

        again = await materializer.materialize(spec, rendered)
        assert again.written == []
        assert again.skipped == ["Cargo.toml", "README.md", "src/main.rs"]
        assert main_rs.read_text() == "fn main() { /* mine */ }\n"
