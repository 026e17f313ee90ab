"""Error taxonomy for the scaffolding engine.

Every fatal condition is a ``ScaffoldError`` subclass tagged with the stage
in which it was raised.  ``ScaffoldPipeline.run`` is the only place these are
caught; everything below it lets them propagate.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Raised when a scaffolding stage fails irrecoverably."""

    def __init__(self, stage: str, message: str) -> None:
        self.stage = stage
        super().__init__(f"{stage}: {message}")


class MissingToolError(ScaffoldError):
    """A hard-required external tool is not on ``PATH``."""

    def __init__(self, tool: str) -> None:
        self.tool = tool
        super().__init__(
            "PREFLIGHT",
            f"'{tool}' not found. Please install it first.",
        )


class MaterializationError(ScaffoldError):
    """Writing to the project tree failed (permissions, full disk, ...)."""

    def __init__(
        self, path: str | Path, reason: str, stage: str = "DECLARING"
    ) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(stage, f"cannot write {self.path}: {reason}")


class TemplateError(ScaffoldError):
    """The root manifest template does not have exactly one injection marker."""

    def __init__(
        self, marker: str, occurrences: int, stage: str = "ASSEMBLING"
    ) -> None:
        self.marker = marker
        self.occurrences = occurrences
        if occurrences == 0:
            detail = f"injection marker '{marker}' not found"
        else:
            detail = (
                f"injection marker '{marker}' found {occurrences} times "
                "(expected exactly once)"
            )
        super().__init__(stage, f"root manifest template: {detail}")
