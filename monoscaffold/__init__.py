"""monoscaffold -- declarative monorepo scaffolding.

Materializes a gateway / control-plane Rust workspace from a fixed list of
section declarations and assembles the root ``Cargo.toml`` member list.

Quick usage::

    import asyncio

    from monoscaffold import ScaffoldConfig, ScaffoldPipeline

    result = asyncio.run(ScaffoldPipeline(ScaffoldConfig(project_name="demo")).run())
"""

from monoscaffold.config import ScaffoldConfig
from monoscaffold.pipeline import ScaffoldPipeline

__version__ = "0.1.0"

__all__ = [
    "ScaffoldConfig",
    "ScaffoldPipeline",
]
