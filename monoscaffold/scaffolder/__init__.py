"""Scaffolding engine -- render, materialize, register, assemble.

Quick usage::

    from monoscaffold.scaffolder import ProjectGenerator, default_sections, assemble

    generator = ProjectGenerator("demo", "/tmp/demo")
    await generator.generate(default_sections())
    manifest = assemble(template_text, generator.registry.drain())
"""

from monoscaffold.scaffolder.generator import ProjectGenerator
from monoscaffold.scaffolder.manifest import MEMBERS_MARKER, assemble, locate_marker
from monoscaffold.scaffolder.materializer import FilesystemMaterializer
from monoscaffold.scaffolder.models import (
    ComponentKind,
    ComponentSpec,
    GeneratedComponent,
    RenderedComponent,
    SectionSpec,
    StaticFile,
)
from monoscaffold.scaffolder.registry import ComponentRegistry
from monoscaffold.scaffolder.sections import default_sections
from monoscaffold.scaffolder.templates import TemplateRenderer

__all__ = [
    "MEMBERS_MARKER",
    "ComponentKind",
    "ComponentRegistry",
    "ComponentSpec",
    "FilesystemMaterializer",
    "GeneratedComponent",
    "ProjectGenerator",
    "RenderedComponent",
    "SectionSpec",
    "StaticFile",
    "TemplateRenderer",
    "assemble",
    "default_sections",
    "locate_marker",
]
