"""Thin async wrappers around the git command line.

Only the handful of commands the template store needs: an installation probe,
a blob-filtered sparse clone, and cone-mode sparse-checkout configuration.
There is no retry or authentication logic; a failing command raises
``GitCommandError`` carrying the command line and git's stderr.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from pathlib import Path

from aix.errors import GitCommandError

logger = logging.getLogger(__name__)

GIT_EXECUTABLE = "git"


async def _run_git(
    *args: str,
    cwd: str | Path | None = None,
    timeout: float | None = None,
) -> tuple[str, str]:
    """Run a git command asynchronously and return (stdout, stderr).

    Args:
        *args: Arguments passed after ``git``.
        cwd: Working directory for the child process.
        timeout: Seconds before the process is killed.  ``None`` waits for as
            long as git runs.

    Raises:
        GitCommandError: If the command exits with a non-zero code or times out.
    """
    cmd = [GIT_EXECUTABLE, *args]
    cmd_str = " ".join(cmd)
    logger.debug("Running %s (cwd=%s)", cmd_str, cwd)

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd) if cwd else None,
    )
    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise GitCommandError(
            f"Git command timed out after {timeout}s: {cmd_str}",
            command=cmd_str,
        )

    stdout = stdout_bytes.decode("utf-8", errors="replace").strip()
    stderr = stderr_bytes.decode("utf-8", errors="replace").strip()

    if process.returncode != 0:
        raise GitCommandError(
            f"Git command failed (exit {process.returncode}): {cmd_str}\n{stderr}",
            command=cmd_str,
            stderr=stderr,
        )

    return stdout, stderr


class GitClient:
    """The git operations used to populate the template cache."""

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    def is_installed(self) -> bool:
        """Return ``True`` if a ``git`` executable is resolvable on ``PATH``."""
        return shutil.which(GIT_EXECUTABLE) is not None

    async def clone_sparse(
        self,
        directory: str | Path,
        url: str,
        branch: str | None = None,
    ) -> None:
        """Clone *url* into *directory* without blobs and with sparse checkout.

        Only history and tree metadata are fetched up front; file contents
        are downloaded lazily for the paths later enabled with
        :meth:`sparse_checkout_set_path`.

        Args:
            directory: Existing, empty directory to clone into.
            url: Remote repository URL (or local path).
            branch: Branch to check out; the remote HEAD when ``None``.
        """
        args = ["clone", "--filter=blob:none", "--sparse"]
        if branch:
            args.extend(["--branch", branch])
        args.extend([url, "."])
        await _run_git(*args, cwd=directory, timeout=self.timeout)

    async def sparse_checkout_init(self, directory: str | Path) -> None:
        """Enable cone-mode sparse checkout in the repository at *directory*."""
        await _run_git(
            "sparse-checkout", "init", "--cone",
            cwd=directory,
            timeout=self.timeout,
        )

    async def sparse_checkout_set_path(self, directory: str | Path, path: str) -> None:
        """Restrict the working tree at *directory* to *path*."""
        await _run_git(
            "sparse-checkout", "set", path,
            cwd=directory,
            timeout=self.timeout,
        )
