"""Pydantic v2 models describing a scaffolded project.

Defines the project kinds, the optional extras that can be layered on top of a
template, and the ``Project`` value returned by ``ProjectBuilder.build``.
"""

from __future__ import annotations

from collections.abc import Collection
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from aix.config import DEFAULT_TOOLCHAIN_VERSION
from aix.errors import InvalidProjectCiProvider, InvalidProjectKind, InvalidProjectName
from aix.interpolation import InterpolationEngine


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ProjectKind(str, Enum):
    """Project layout. The value doubles as the template directory name."""
    STANDALONE = "standalone"
    WORKSPACE = "workspace"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "ProjectKind":
        """Parse *value*, raising ``InvalidProjectKind`` if it is unknown."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidProjectKind(value) from None


class CIProvider(str, Enum):
    """Supported continuous-integration providers."""
    GITHUB = "github"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "CIProvider":
        """Parse *value*, raising ``InvalidProjectCiProvider`` if it is unknown."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidProjectCiProvider(value) from None


class ExtraKind(str, Enum):
    """The independently toggleable add-ons."""
    DOCKER = "docker"
    CI = "ci"


# ---------------------------------------------------------------------------
# Project names
# ---------------------------------------------------------------------------

_PATH_SEPARATORS = ("/", "\\")


def validate_project_name(name: str) -> str:
    """Return *name* if it is usable as one directory name, else raise.

    The name becomes both the project directory and, for workspaces, the
    member directory inside it, so it must be a single path component.

    Raises:
        InvalidProjectName: If *name* is blank, ``.``, ``..`` or contains a
            path separator.
    """
    if not name.strip():
        raise InvalidProjectName(name, "name is empty")
    if name in (".", ".."):
        raise InvalidProjectName(name, "name refers to an existing directory")
    if any(sep in name for sep in _PATH_SEPARATORS):
        raise InvalidProjectName(name, "name must not contain a path separator")
    return name


# ---------------------------------------------------------------------------
# Extras
# ---------------------------------------------------------------------------

class Extra(BaseModel):
    """An add-on layered onto a project. ``provider`` is only set for CI."""

    model_config = ConfigDict(frozen=True)

    kind: ExtraKind
    provider: CIProvider | None = None

    @model_validator(mode="after")
    def _check_provider(self) -> "Extra":
        if self.kind is ExtraKind.CI and self.provider is None:
            raise ValueError("a CI extra requires a provider")
        if self.kind is not ExtraKind.CI and self.provider is not None:
            raise ValueError(f"a {self.kind.value} extra takes no provider")
        return self

    @classmethod
    def docker(cls) -> "Extra":
        return cls(kind=ExtraKind.DOCKER)

    @classmethod
    def ci(cls, provider: CIProvider = CIProvider.GITHUB) -> "Extra":
        return cls(kind=ExtraKind.CI, provider=provider)

    def __str__(self) -> str:
        if self.provider is not None:
            return f"{self.kind.value}({self.provider.value})"
        return self.kind.value


# ---------------------------------------------------------------------------
# Project
# ---------------------------------------------------------------------------

class Project(BaseModel):
    """A project whose template files have been written to ``source_root``.

    The value itself is immutable; ``compile`` only changes file contents on
    disk.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    kind: ProjectKind = ProjectKind.STANDALONE
    source_root: Path
    extras: tuple[Extra, ...] = ()
    toolchain_version: str = DEFAULT_TOOLCHAIN_VERSION

    def has_extra(self, kind: ExtraKind) -> bool:
        return any(extra.kind is kind for extra in self.extras)

    def get_extra(self, kind: ExtraKind) -> Extra | None:
        for extra in self.extras:
            if extra.kind is kind:
                return extra
        return None

    def template_variables(self) -> dict[str, str]:
        """Variables substituted into the project's files, built fresh per call."""
        return {
            "crate_name": self.name,
            "rust_version": self.toolchain_version,
            "toolchain_version": self.toolchain_version,
        }

    async def compile(self, exclude: Collection[str] = ()) -> list[Path]:
        """Substitute template variables in every file under ``source_root``.

        Args:
            exclude: File or directory names to leave untouched.

        Returns:
            Absolute paths of every file visited.
        """
        engine = InterpolationEngine(self.template_variables(), exclude)
        return await engine.replace_all(self.source_root)
