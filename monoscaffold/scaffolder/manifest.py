"""Workspace manifest assembly.

The root ``Cargo.toml`` template carries a single anchor line::

    members = [
    # <MEMBERS>
    ]

``assemble`` swaps that one line for the member entries and leaves every other
line (shared dependencies, package metadata) byte-for-byte intact.  The work
is split in two steps, ``locate_marker`` then substitution, so a bad template
can be rejected before anything is written.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from monoscaffold.errors import TemplateError

MEMBERS_MARKER = "# <MEMBERS>"


def format_member(relative_path: str) -> str:
    """Format one workspace member entry (without line ending).

    The path is written as a TOML basic string, so backslashes and double
    quotes are escaped.
    """
    escaped = relative_path.replace("\\", "\\\\").replace('"', '\\"')
    return f'  "{escaped}",'


def locate_marker(
    lines: Sequence[str], marker: str = MEMBERS_MARKER, stage: str = "ASSEMBLING"
) -> int:
    """Return the index of the only line whose content is *marker*.

    Surrounding whitespace and the line ending are ignored when matching.

    Raises:
        TemplateError: if the marker occurs zero times or more than once.
    """
    hits = [i for i, line in enumerate(lines) if line.strip() == marker]
    if len(hits) != 1:
        raise TemplateError(marker, len(hits), stage=stage)
    return hits[0]


def validate_template(
    template_text: str, marker: str = MEMBERS_MARKER, stage: str = "PREFLIGHT"
) -> None:
    """Check *template_text* has exactly one injection point before any write."""
    locate_marker(template_text.splitlines(keepends=True), marker, stage)


def assemble(
    template_text: str,
    ordered_paths: Iterable[str],
    marker: str = MEMBERS_MARKER,
) -> str:
    """Inject *ordered_paths* at the marker line and drop the marker.

    Entries keep the order of *ordered_paths* exactly; duplicates are kept.
    The marker line's own line ending is reused for every entry so CRLF
    templates stay CRLF.

    Raises:
        TemplateError: if the marker is missing or ambiguous.
    """
    lines = template_text.splitlines(keepends=True)
    index = locate_marker(lines, marker)

    marker_line = lines[index]
    newline = marker_line[len(marker_line.rstrip("\r\n")):] or "\n"

    entries = [format_member(path) + newline for path in ordered_paths]
    return "".join(lines[:index] + entries + lines[index + 1:])
