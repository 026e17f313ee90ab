"""Jinja2 template rendering for monorepo scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``monoscaffold/scaffolder/templates/`` directory.  Rendering is a pure
function of the template and its context: nothing here touches the project
tree, which is the materializer's job.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .models import ComponentKind, RenderedComponent


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

ROOT_MANIFEST_TEMPLATE = "workspace/Cargo.toml.j2"

# kind -> (source template, path of the stub inside the component)
_SOURCE_STUBS: dict[ComponentKind, tuple[str, str]] = {
    ComponentKind.LIBRARY: ("component/lib.rs.j2", "src/lib.rs"),
    ComponentKind.BINARY: ("component/main.rs.j2", "src/main.rs"),
}


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for the generated monorepo.

    Templates are looked up under a configurable directory.  Undefined
    variables raise instead of rendering as empty strings, so a template that
    drifts from its context fails at render time rather than producing a
    subtly broken file.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"contracts/admin-api.yaml.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return the sorted template names starting with *prefix*."""
        return sorted(
            self.env.list_templates(filter_func=lambda name: name.startswith(prefix))
        )

    # -- Components --------------------------------------------------------

    def render_component(
        self, kind: ComponentKind, relative_path: str, name: str
    ) -> RenderedComponent:
        """Render the manifest fragment, README and source stub of a component.

        Libraries get a ``src/lib.rs`` holding one canary test; binaries get a
        ``src/main.rs`` that prints a bootstrap message naming the component.
        Identical arguments always yield identical output.
        """
        kind = ComponentKind(kind)
        context = {
            "kind": kind.value,
            "relative_path": relative_path,
            "name": name,
        }
        source_template, source_path = _SOURCE_STUBS[kind]
        return RenderedComponent(
            manifest_fragment=self.render("component/Cargo.toml.j2", context),
            readme=self.render("component/README.md.j2", context),
            source_stub=self.render(source_template, context),
            source_path=source_path,
        )

    # -- Root manifest -----------------------------------------------------

    def root_manifest_template(
        self, context: dict[str, Any], custom_path: str | Path | None = None
    ) -> str:
        """Return the root manifest template text, marker still in place.

        A *custom_path* is read verbatim (no Jinja processing) so any
        hand-written ``Cargo.toml`` with a marker line can be used.

        Raises:
            OSError: if *custom_path* cannot be read.
        """
        if custom_path is not None:
            return Path(custom_path).read_text(encoding="utf-8")
        return self.render(ROOT_MANIFEST_TEMPLATE, context)
