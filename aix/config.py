"""aix configuration.

Typed, immutable configuration for the scaffolding core.  A single ``Config``
is built once at process start (by the CLI, or by a test fixture pointing at a
temporary directory) and passed explicitly into ``TemplateStore`` and
``ProjectBuilder``; nothing reads global state.
"""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_data_dir
from pydantic import BaseModel, ConfigDict, Field

from aix.errors import MissingLocalDataDir

APP_NAME = "aix"

RELATIVE_TEMPLATES_DIR = "templates"
RELATIVE_TEMP_DIR = ".tmp"

DEFAULT_REPOSITORY_URL = "https://github.com/ekkolon/aix"
DEFAULT_REPOSITORY_BRANCH = "main"
DEFAULT_TOOLCHAIN_VERSION = "1.75"


class TemplateRepository(BaseModel):
    """Remote git repository holding the project templates."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(default=DEFAULT_REPOSITORY_URL)
    branch: str = Field(default=DEFAULT_REPOSITORY_BRANCH)
    subdirectory: str = Field(
        default=RELATIVE_TEMPLATES_DIR,
        min_length=1,
        description="Path inside the repository that contains the templates",
    )


class LocalStore(BaseModel):
    """On-disk locations owned by the application.

    ``templates_dir`` and ``temp_dir`` are derived from ``local_data_dir`` and
    can never point elsewhere.  Both only ever hold cached copies and may be
    deleted at any time.
    """

    model_config = ConfigDict(frozen=True)

    local_data_dir: Path

    @property
    def templates_dir(self) -> Path:
        """Cache of the remote template subdirectory."""
        return self.local_data_dir / RELATIVE_TEMPLATES_DIR

    @property
    def temp_dir(self) -> Path:
        """Scratch directory used as the sparse clone target."""
        return self.local_data_dir / RELATIVE_TEMP_DIR

    @classmethod
    def for_app(cls, app_name: str, data_root: str | Path | None = None) -> "LocalStore":
        """Resolve the store for *app_name*.

        Args:
            app_name: Application name; becomes the last path component.
            data_root: Override for the OS local-data root.  Defaults to the
                platform's standard location (``~/.local/share`` on Linux,
                ``~/Library/Application Support`` on macOS, ``%LOCALAPPDATA%``
                on Windows).

        Raises:
            MissingLocalDataDir: If no absolute data root can be determined.
        """
        root = Path(data_root) if data_root is not None else _os_local_data_root()
        root = root.expanduser()
        if not root.is_absolute():
            raise MissingLocalDataDir()
        return cls(local_data_dir=root / app_name)


class Config(BaseModel):
    """Process-wide aix configuration."""

    model_config = ConfigDict(frozen=True)

    app_name: str = Field(default=APP_NAME)
    store: LocalStore
    repository: TemplateRepository = Field(default_factory=TemplateRepository)
    toolchain_version: str = Field(
        default=DEFAULT_TOOLCHAIN_VERSION,
        description="Toolchain pinned into generated projects",
    )

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    @property
    def local_data_dir(self) -> Path:
        return self.store.local_data_dir

    @property
    def templates_dir(self) -> Path:
        return self.store.templates_dir

    @property
    def temp_dir(self) -> Path:
        return self.store.temp_dir

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def default(cls, app_name: str = APP_NAME) -> "Config":
        """Build a ``Config`` rooted at the OS local-data directory."""
        return cls(app_name=app_name, store=LocalStore.for_app(app_name))

    @classmethod
    def from_env(cls, app_name: str = APP_NAME) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            AIX_DATA_DIR, AIX_TEMPLATES_URL, AIX_TEMPLATES_BRANCH,
            AIX_TEMPLATES_SUBDIR.
        """
        repo_kwargs: dict[str, str] = {}
        if os.environ.get("AIX_TEMPLATES_URL"):
            repo_kwargs["url"] = os.environ["AIX_TEMPLATES_URL"]
        if os.environ.get("AIX_TEMPLATES_BRANCH"):
            repo_kwargs["branch"] = os.environ["AIX_TEMPLATES_BRANCH"]
        if os.environ.get("AIX_TEMPLATES_SUBDIR"):
            repo_kwargs["subdirectory"] = os.environ["AIX_TEMPLATES_SUBDIR"]

        return cls(
            app_name=app_name,
            store=LocalStore.for_app(app_name, os.environ.get("AIX_DATA_DIR") or None),
            repository=TemplateRepository(**repo_kwargs),
        )


def _os_local_data_root() -> Path:
    # appauthor=False keeps Windows from inserting a vendor directory.
    return Path(user_data_dir(appauthor=False, roaming=False))
