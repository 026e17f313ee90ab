"""Ordered accumulator of workspace member paths.

The registry is threaded through the generator for the length of one run and
drained exactly once by the manifest assembler.  Insertion order is the member
order in the final manifest, so nothing here sorts or de-duplicates.
"""

from __future__ import annotations

from collections.abc import Iterator


class ComponentRegistry:
    """Append-only list of component paths in declaration order."""

    def __init__(self) -> None:
        self._paths: list[str] = []

    def append(self, relative_path: str) -> None:
        """Register a materialized component.

        Registering the same path twice is a caller error, but it is kept as-is:
        the assembler reproduces whatever the declarations said.
        """
        self._paths.append(relative_path)

    def drain(self) -> list[str]:
        """Return every registered path in order and empty the registry."""
        paths, self._paths = self._paths, []
        return paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._paths))

    def __contains__(self, relative_path: object) -> bool:
        return relative_path in self._paths

    def __repr__(self) -> str:
        return f"ComponentRegistry({self._paths!r})"
