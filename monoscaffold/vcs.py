"""Version-control bootstrap for a freshly scaffolded project.

Runs ``git init``, stages everything and records one initial commit.  This
step is optional: the pipeline downgrades every ``VcsError`` to a warning.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from monoscaffold.config import DEFAULT_COMMIT_MESSAGE


class VcsError(Exception):
    """Raised when a git command fails or times out."""

    def __init__(self, message: str, command: str = "", stderr: str = ""):
        self.command = command
        self.stderr = stderr
        super().__init__(message)


async def _run_git(
    *args: str,
    executable: str = "git",
    cwd: str | Path | None = None,
    timeout: float = 60.0,
) -> tuple[str, str]:
    """Run a git command asynchronously and return (stdout, stderr).

    Raises VcsError if the command cannot be started, times out or exits
    with a non-zero code.
    """
    cmd = [executable] + list(args)
    cmd_str = " ".join(cmd)

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=str(cwd) if cwd else None,
        )
    except OSError as exc:
        raise VcsError(f"Cannot run {cmd_str}: {exc}", command=cmd_str) from exc

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise VcsError(
            f"Git command timed out after {timeout}s: {cmd_str}",
            command=cmd_str,
        )

    stdout = stdout_bytes.decode("utf-8", errors="replace").strip()
    stderr = stderr_bytes.decode("utf-8", errors="replace").strip()

    if process.returncode != 0:
        raise VcsError(
            f"Git command failed (exit {process.returncode}): {cmd_str}\n{stderr}",
            command=cmd_str,
            stderr=stderr,
        )

    return stdout, stderr


class GitInitializer:
    """Turns a project directory into a git repository with one commit."""

    def __init__(self, executable: str = "git", timeout: float = 60.0) -> None:
        self.executable = executable
        self.timeout = timeout

    def is_repository(self, path: str | Path) -> bool:
        return (Path(path) / ".git").exists()

    async def initialize(
        self, path: str | Path, message: str = DEFAULT_COMMIT_MESSAGE
    ) -> None:
        """``git init`` + ``git add .`` + ``git commit -m message`` in *path*.

        Raises:
            VcsError: on the first failing command.
        """
        for args in (
            ("init",),
            ("add", "."),
            ("commit", "-m", message),
        ):
            await _run_git(
                *args, executable=self.executable, cwd=path, timeout=self.timeout
            )
