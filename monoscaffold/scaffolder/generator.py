"""Section-by-section project generation.

Takes the ordered ``SectionSpec`` declarations and, for each one, seeds its
placeholder directories, renders its static files and materializes its
components.  Component paths are appended to the ``ComponentRegistry`` only
after their files are on disk; non-component files never reach the registry.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .materializer import FilesystemMaterializer
from .models import ComponentSpec, GeneratedComponent, SectionSpec
from .registry import ComponentRegistry
from .templates import TemplateRenderer


class ProjectGenerator:
    """Renders and writes every declared section under *project_root*.

    The renderer, materializer and registry can be injected (tests share one
    registry between generator and assembler, the pipeline does the same).
    """

    def __init__(
        self,
        project_name: str,
        project_root: str | Path,
        *,
        renderer: TemplateRenderer | None = None,
        materializer: FilesystemMaterializer | None = None,
        registry: ComponentRegistry | None = None,
    ) -> None:
        self.project_name = project_name
        self.project_root = Path(project_root)
        self.renderer = renderer or TemplateRenderer()
        self.materializer = materializer or FilesystemMaterializer(self.project_root)
        self.registry = registry if registry is not None else ComponentRegistry()

    # -- Public API --------------------------------------------------------

    def build_context(self) -> dict[str, Any]:
        """Template context shared by every static file and the root manifest."""
        return {"project_name": self.project_name}

    async def generate(self, sections: list[SectionSpec]) -> list[GeneratedComponent]:
        """Generate *sections* in order.

        Stops at the first ``MaterializationError``; whatever was written
        before it stays on disk.

        Returns:
            Every generated component, in declaration order.
        """
        await self.materializer.ensure_dir(".")
        generated: list[GeneratedComponent] = []
        for section in sections:
            generated.extend(await self.generate_section(section))
        return generated

    async def generate_section(self, section: SectionSpec) -> list[GeneratedComponent]:
        """Seed, render and materialize a single section."""
        for keep_dir in section.keep_dirs:
            await self.materializer.touch_keep(keep_dir)

        context = self.build_context()
        for static in section.files:
            content = self.renderer.render(static.template, {**context, **static.context})
            await self.materializer.write_if_absent(static.path, content)

        generated: list[GeneratedComponent] = []
        for spec in section.components:
            generated.append(await self.generate_component(spec))
        return generated

    async def generate_component(self, spec: ComponentSpec) -> GeneratedComponent:
        """Render, write and register one component."""
        rendered = self.renderer.render_component(
            spec.kind, spec.relative_path, spec.display_name
        )
        component = await self.materializer.materialize(spec, rendered)
        self.registry.append(spec.relative_path)
        return component
