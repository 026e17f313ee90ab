"""monoscaffold pipeline orchestrator.

Drives one scaffolding run through four stages, strictly in order:

Stage 1: PREFLIGHT  -- Check required tools, load and validate the root manifest template.
Stage 2: DECLARING  -- Render and write every section, registering components.
Stage 3: ASSEMBLING -- Inject the registered members into the root manifest.
Stage 4: FINALIZING -- Optional git init + initial commit (never fatal).

Usage::

    python -m monoscaffold my-gateway
    python -m monoscaffold my-gateway -o ~/src --no-git
"""

from __future__ import annotations

import asyncio
import sys
import time
from collections.abc import Callable
from pathlib import Path

from pydantic import ValidationError
from rich.panel import Panel

from monoscaffold.config import ScaffoldConfig
from monoscaffold.errors import MissingToolError, ScaffoldError
from monoscaffold.scaffolder.generator import ProjectGenerator
from monoscaffold.scaffolder.manifest import assemble, validate_template
from monoscaffold.scaffolder.models import ScaffoldResult, SectionSpec
from monoscaffold.scaffolder.sections import default_sections
from monoscaffold.scaffolder.templates import TemplateRenderer
from monoscaffold.utils import (
    command_exists,
    console,
    format_duration,
    print_error,
    print_stage_header,
    print_success,
    print_summary_table,
    print_warning,
)
from monoscaffold.vcs import GitInitializer, VcsError

STAGES: tuple[str, ...] = ("PREFLIGHT", "DECLARING", "ASSEMBLING", "FINALIZING", "DONE")


class ScaffoldPipeline:
    """Scaffolding orchestrator.

    Owns the ``ComponentRegistry`` for the run (through its generator) and
    moves forward through ``STAGES`` without retries.  The first
    ``ScaffoldError`` stops the run; files already written are left in place.

    Attributes:
        config: Settings for this run.
        result: Accumulated outcome, returned by :meth:`run`.
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        *,
        sections: list[SectionSpec] | None = None,
        command_exists: Callable[[str], bool] = command_exists,
        vcs: GitInitializer | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.sections = sections if sections is not None else default_sections()
        self.command_exists = command_exists
        self.vcs = vcs or GitInitializer(executable=config.vcs_tool)
        self.generator = ProjectGenerator(
            config.project_name,
            config.project_root,
            renderer=renderer,
        )
        self.result = ScaffoldResult(project_root=config.project_root)
        self._manifest_template = ""
        self._vcs_available = False

    # ------------------------------------------------------------------
    # Driver
    # ------------------------------------------------------------------

    async def run(self) -> ScaffoldResult:
        """Execute every stage and return the run's ``ScaffoldResult``."""
        started = time.monotonic()
        console.print(
            Panel(
                f"[bold bright_cyan]monoscaffold[/bold bright_cyan]\n"
                f"Project : {self.config.project_name}\n"
                f"Root    : {self.config.project_root.resolve()}",
                title="[bold]Scaffolding[/bold]",
                border_style="bright_cyan",
            )
        )

        try:
            for number, stage in enumerate(STAGES[:-1], start=1):
                self._enter(number, stage)
                await getattr(self, f"_{stage.lower()}")()
        except ScaffoldError as exc:
            self.result.error = str(exc)
            print_error(f"Scaffolding FAILED during {self.result.stage}: {exc}")
        else:
            self.result.stage = STAGES[-1]
            self.result.success = True

        materializer = self.generator.materializer
        self.result.files_written = len(materializer.written)
        self.result.files_skipped = len(materializer.skipped)
        self._print_summary(time.monotonic() - started)
        return self.result

    def _enter(self, number: int, stage: str) -> None:
        self.result.stage = stage
        print_stage_header(number, stage)

    def _warn(self, message: str) -> None:
        self.result.warnings.append(message)
        print_warning(f"  {message}")

    # ------------------------------------------------------------------
    # Stage 1: PREFLIGHT
    # ------------------------------------------------------------------

    async def _preflight(self) -> None:
        """Fail before touching the filesystem if the run cannot succeed.

        * Every required tool must be on PATH (``MissingToolError`` otherwise).
        * A missing VCS tool only disables FINALIZING.
        * The root manifest template must load and hold exactly one marker.
        """
        for tool in self.config.required_tools:
            if not self.command_exists(tool):
                raise MissingToolError(tool)
            console.print(f"  [green]+[/green] {tool} found")

        if self.config.init_vcs:
            self._vcs_available = self.command_exists(self.config.vcs_tool)
            if not self._vcs_available:
                self._warn(
                    f"'{self.config.vcs_tool}' not found; skipping initial commit."
                )

        template_path = self.config.manifest_template
        try:
            self._manifest_template = self.generator.renderer.root_manifest_template(
                self.generator.build_context(), template_path
            )
        except (OSError, UnicodeDecodeError) as exc:
            raise ScaffoldError(
                "PREFLIGHT", f"cannot read manifest template {template_path}: {exc}"
            ) from exc
        validate_template(self._manifest_template)
        console.print("  [green]+[/green] Root manifest template valid")

        if self.config.root_manifest_path.exists():
            self._warn(
                f"{self.config.root_manifest_path} already exists; "
                "it will be overwritten if the member list changed."
            )

    # ------------------------------------------------------------------
    # Stage 2: DECLARING
    # ------------------------------------------------------------------

    async def _declaring(self) -> None:
        console.print(f"  Scaffolding monorepo at [bold]{self.config.project_root}[/bold]")
        await self.generator.generate(self.sections)
        for section in self.sections:
            console.print(
                f"  [green]+[/green] {section.name}: "
                f"{len(section.components)} component(s), "
                f"{len(section.files)} file(s), {len(section.keep_dirs)} placeholder dir(s)"
            )

    # ------------------------------------------------------------------
    # Stage 3: ASSEMBLING
    # ------------------------------------------------------------------

    async def _assembling(self) -> None:
        members = self.generator.registry.drain()
        manifest = assemble(self._manifest_template, members)

        existed = self.config.root_manifest_path.exists()
        changed = await self.generator.materializer.write_file("Cargo.toml", manifest)
        if existed and changed:
            self._warn(f"Overwrote {self.config.root_manifest_path}")

        self.result.members = members
        console.print(f"  [green]+[/green] {len(members)} workspace member(s) registered")

    # ------------------------------------------------------------------
    # Stage 4: FINALIZING
    # ------------------------------------------------------------------

    async def _finalizing(self) -> None:
        root = self.config.project_root
        if not self.config.init_vcs:
            console.print("  [dim]Version control disabled -- skipping.[/dim]")
            return
        if not self._vcs_available:
            console.print(f"  [dim]{self.config.vcs_tool} unavailable -- skipping.[/dim]")
            return
        if self.vcs.is_repository(root):
            console.print("  [dim]Already a repository -- skipping initial commit.[/dim]")
            return

        try:
            await self.vcs.initialize(root, self.config.commit_message)
        except VcsError as exc:
            self._warn(f"Version control bootstrap failed: {exc}")
            return
        self.result.vcs_initialized = True
        console.print("  [green]+[/green] Repository initialised with initial commit")

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def _print_summary(self, elapsed: float) -> None:
        console.print()
        print_summary_table(
            {
                "Project": self.config.project_name,
                "Stage reached": self.result.stage,
                "Workspace members": str(len(self.result.members)),
                "Files written": str(self.result.files_written),
                "Files skipped": str(self.result.files_skipped),
                "Warnings": str(len(self.result.warnings)),
                "Duration": format_duration(elapsed),
            },
            title="Scaffold Summary",
        )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``monoscaffold`` / ``python -m monoscaffold``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="monoscaffold",
        description="Scaffold a gateway/control-plane Rust monorepo with placeholders",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  monoscaffold\n"
            "  monoscaffold my-gateway -o ~/src\n"
            "  monoscaffold my-gateway --no-git\n"
        ),
    )
    parser.add_argument(
        "project_name",
        nargs="?",
        default=None,
        help="Project directory name (default: lattice)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Parent directory for the project (default: current directory)",
    )
    parser.add_argument(
        "--no-git",
        action="store_true",
        help="Skip git init and the initial commit",
    )
    parser.add_argument(
        "--manifest-template",
        default=None,
        help="Custom root Cargo.toml template containing a '# <MEMBERS>' line",
    )

    args = parser.parse_args(argv)

    try:
        config = ScaffoldConfig.from_env(
            project_name=args.project_name,
            output_dir=Path(args.output) if args.output else None,
            manifest_template=Path(args.manifest_template) if args.manifest_template else None,
            init_vcs=False if args.no_git else None,
        )
    except ValidationError as exc:
        console.print(f"[bold red]Error:[/bold red] Invalid configuration: {exc}")
        sys.exit(1)

    result = asyncio.run(ScaffoldPipeline(config).run())

    if result.success:
        print_success(
            f"Done. Try: cd {config.project_root} && make tree && make build && make test"
        )
    else:
        sys.exit(1)


if __name__ == "__main__":
    main()
