"""Declarations for every section of the generated monorepo.

Each ``SectionSpec`` lists, in order, the components it registers as
workspace members, the placeholder directories it seeds with ``.keep`` files,
and the static files it renders.  Member order in the root manifest follows
the order of ``default_sections()`` and, within a section, of ``components``.
"""

from __future__ import annotations

from .models import ComponentSpec, SectionSpec, StaticFile


GATEWAY_LIBS: tuple[str, ...] = (
    "core",
    "proxy",
    "authn",
    "authz",
    "limits",
    "routing",
    "transforms",
    "observability",
    "snapshot",
    "plugin-sdk",
    "plugin-host",
    "tls",
    "errors",
    "commons",
)
GATEWAY_BINS: tuple[str, ...] = ("gatewayd",)

CONTROL_PLANE_LIBS: tuple[str, ...] = ("domain", "storage", "events", "contracts")
CONTROL_PLANE_SERVICES: tuple[str, ...] = (
    "admin-api",
    "distributor",
    "idp",
    "secrets",
    "auditor",
)


def _heading(path: str, title: str) -> StaticFile:
    return StaticFile(path=path, template="common/heading.md.j2", context={"title": title})


def workspace_section() -> SectionSpec:
    return SectionSpec(
        name="workspace",
        files=(
            StaticFile(path=".gitignore", template="workspace/gitignore.j2"),
            StaticFile(path="README.md", template="workspace/README.md.j2"),
            StaticFile(path="Makefile", template="workspace/Makefile.j2"),
        ),
    )


def gateway_section() -> SectionSpec:
    components = [ComponentSpec.library(f"gateway/crates/{c}") for c in GATEWAY_LIBS]
    components += [ComponentSpec.binary(f"gateway/bin/{b}") for b in GATEWAY_BINS]
    return SectionSpec(
        name="gateway",
        components=tuple(components),
        keep_dirs=("gateway/tests/integration",),
        files=(_heading("gateway/tests/README.md", "Gateway tests"),),
    )


def control_plane_section() -> SectionSpec:
    components = [
        ComponentSpec.library(f"control-plane/crates/{c}") for c in CONTROL_PLANE_LIBS
    ]
    components += [
        ComponentSpec.binary(f"control-plane/services/{s}")
        for s in CONTROL_PLANE_SERVICES
    ]
    return SectionSpec(
        name="control-plane",
        components=tuple(components),
        keep_dirs=("control-plane/migrations", "control-plane/tests"),
        files=(_heading("control-plane/README.md", "Control plane"),),
    )


def console_section() -> SectionSpec:
    return SectionSpec(
        name="console",
        keep_dirs=tuple(
            f"console/{d}" for d in ("app", "components", "features", "lib", "e2e")
        ),
        files=(StaticFile(path="console/README.md", template="console/README.md.j2"),),
    )


def contracts_section() -> SectionSpec:
    return SectionSpec(
        name="contracts",
        files=(
            StaticFile(
                path="contracts/openapi/v1/admin-api.yaml",
                template="contracts/admin-api.yaml.j2",
            ),
            StaticFile(
                path="contracts/proto/v1/gateway_watch.proto",
                template="contracts/gateway_watch.proto.j2",
            ),
            StaticFile(
                path="contracts/schemas/snapshot/v1/schema.json",
                template="contracts/snapshot.schema.json.j2",
            ),
            StaticFile(
                path="contracts/schemas/policy/v1/README.md",
                template="contracts/policy-README.md.j2",
            ),
            StaticFile(
                path="contracts/plugin/manifest.schema.json",
                template="contracts/plugin-manifest.schema.json.j2",
            ),
            _heading("contracts/README.md", "Contracts"),
        ),
    )


def plugins_section() -> SectionSpec:
    return SectionSpec(
        name="plugins",
        keep_dirs=("plugins", "plugins/rust", "plugins/wasm"),
        files=(_heading("plugins/README.md", "Plugins playground"),),
    )


def tooling_section() -> SectionSpec:
    return SectionSpec(
        name="tooling",
        keep_dirs=tuple(
            f"tooling/{d}" for d in ("helm", "k6", "devcontainer", "scripts")
        ),
        files=(_heading("tooling/README.md", "Tooling"),),
    )


def docs_section() -> SectionSpec:
    return SectionSpec(
        name="docs",
        keep_dirs=("docs/runbooks", "docs/design"),
        files=(
            StaticFile(
                path="docs/adr/0001-project-structure.md",
                template="docs/0001-project-structure.md.j2",
            ),
        ),
    )


def ci_section() -> SectionSpec:
    return SectionSpec(
        name="ci",
        files=(StaticFile(path=".github/workflows/ci.yml", template="ci/ci.yml.j2"),),
    )


def default_sections() -> list[SectionSpec]:
    """Every section of the monorepo, in generation order."""
    return [
        workspace_section(),
        gateway_section(),
        control_plane_section(),
        console_section(),
        contracts_section(),
        plugins_section(),
        tooling_section(),
        docs_section(),
        ci_section(),
    ]
