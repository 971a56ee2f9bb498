"""Error types raised by the aix scaffolding core.

Every failure the template store, project builder or interpolation engine can
produce on its own derives from :class:`AixError`.  Filesystem problems are not
wrapped: ``OSError`` and its subclasses propagate unchanged so the caller sees
the original errno and path.
"""

from __future__ import annotations

from pathlib import Path


class AixError(Exception):
    """Base class for all aix errors."""


class MissingGitInstallation(AixError):
    """Raised when the ``git`` executable cannot be found on ``PATH``."""

    def __init__(self) -> None:
        super().__init__("Missing Git installation: 'git' was not found on PATH")


class NotADirectory(AixError):
    """Raised when a path expected to be a directory exists as something else."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Path {self.path} is not a directory")


class DirectoryNotEmpty(AixError):
    """Raised when a directory that must be empty already has entries."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Directory at {self.path} is not empty")


class InvalidProjectKind(AixError):
    """Raised when a string does not name a known project kind."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Invalid project kind {kind!r}")


class InvalidProjectName(AixError, ValueError):
    """Raised when a project name cannot be used as a single directory name."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        super().__init__(f"Invalid project name {name!r}: {reason}")


class InvalidProjectCiProvider(AixError):
    """Raised when a string does not name a supported CI provider."""

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f"Invalid project CI provider {provider!r}")


class MissingLocalDataDir(AixError):
    """Raised when the OS local-data directory cannot be determined."""

    def __init__(self) -> None:
        super().__init__("Failed to determine the aix local data directory")


class GitCommandError(AixError):
    """Raised when a git subprocess exits with a non-zero status."""

    def __init__(self, message: str, command: str = "", stderr: str = "") -> None:
        self.command = command
        self.stderr = stderr
        super().__init__(message)


__all__ = [
    "AixError",
    "DirectoryNotEmpty",
    "GitCommandError",
    "InvalidProjectCiProvider",
    "InvalidProjectKind",
    "InvalidProjectName",
    "MissingGitInstallation",
    "MissingLocalDataDir",
    "NotADirectory",
]
