"""Filesystem materialization of rendered components.

Every write goes through :meth:`FilesystemMaterializer.write_if_absent`:
an existing file is never touched, so hand edits survive a re-run and a second
run over an unchanged declaration list writes nothing.  The only exception is
:meth:`write_file`, reserved for the assembled root manifest.

Writes are not transactional.  When a write fails, files written before it
stay on disk and the caller aborts the run.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from monoscaffold.errors import MaterializationError

from .models import ComponentSpec, GeneratedComponent, RenderedComponent

KEEP_FILE = ".keep"


class FilesystemMaterializer:
    """Creates directories and files under a project root.

    Paths handed to the public methods are relative to ``root``.  The lists
    ``written`` and ``skipped`` record, in order, every file path (relative,
    POSIX style) created or left alone during this materializer's lifetime.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)
        self.written: list[str] = []
        self.skipped: list[str] = []

    # -- Primitives ----------------------------------------------------------

    async def ensure_dir(self, relative_dir: str) -> Path:
        """Create ``root / relative_dir`` and its parents if missing."""
        target = self.root / relative_dir
        try:
            await asyncio.to_thread(target.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            raise MaterializationError(target, exc.strerror or str(exc)) from exc
        return target

    async def write_if_absent(self, relative_file: str, content: str) -> bool:
        """Write *content* unless the file already exists.

        Returns:
            ``True`` if the file was written, ``False`` if it was skipped.

        Raises:
            MaterializationError: on any underlying ``OSError``.
        """
        target = self.root / relative_file
        try:
            written = await asyncio.to_thread(_write_new_file, target, content)
        except OSError as exc:
            raise MaterializationError(target, exc.strerror or str(exc)) from exc

        (self.written if written else self.skipped).append(relative_file)
        return written

    async def write_file(
        self, relative_file: str, content: str, *, stage: str = "ASSEMBLING"
    ) -> bool:
        """Write *content*, replacing the file if its content differs.

        Returns:
            ``True`` if the file was (re)written, ``False`` if it already held
            exactly *content*.
        """
        target = self.root / relative_file
        try:
            changed = await asyncio.to_thread(_replace_file, target, content)
        except OSError as exc:
            raise MaterializationError(
                target, exc.strerror or str(exc), stage=stage
            ) from exc

        (self.written if changed else self.skipped).append(relative_file)
        return changed

    async def touch_keep(self, relative_dir: str) -> bool:
        """Create *relative_dir* holding an empty ``.keep`` placeholder."""
        await self.ensure_dir(relative_dir)
        return await self.write_if_absent(f"{relative_dir}/{KEEP_FILE}", "")

    # -- Components ----------------------------------------------------------

    async def materialize(
        self, spec: ComponentSpec, rendered: RenderedComponent
    ) -> GeneratedComponent:
        """Write a rendered component into ``root / spec.relative_path``.

        Raises:
            MaterializationError: if the directory or any file cannot be written.
        """
        component_dir = await self.ensure_dir(spec.relative_path)
        generated = GeneratedComponent(spec=spec, path=component_dir)

        for name, content in rendered.files().items():
            relative_file = f"{spec.relative_path}/{name}"
            if await self.write_if_absent(relative_file, content):
                generated.written.append(name)
            else:
                generated.skipped.append(name)

        return generated


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_new_file(path: Path, content: str) -> bool:
    """Synchronous helper: create parent dirs and write *path* only if new."""
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with path.open("x", encoding="utf-8", newline="") as fh:
            fh.write(content)
    except FileExistsError:
        return False
    return True


def _replace_file(path: Path, content: str) -> bool:
    """Synchronous helper: write *path* unless it already holds *content*.

    Compared as bytes, so an existing file that is not valid UTF-8 is replaced.
    """
    data = content.encode("utf-8")
    if path.is_file() and path.read_bytes() == data:
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return True
