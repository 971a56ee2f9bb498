"""Local template cache backed by a remote git repository.

``TemplateStore.sync`` replaces the contents of the templates cache with a
fresh copy of the repository's template subdirectory.  The copy is obtained
through a blob-filtered, sparse clone into the scratch directory so that only
the template files are ever downloaded.

Every sync is a full refresh.  Callers decide when one is needed;
``ProjectBuilder`` only syncs when the template it needs is absent, so an
existing (possibly stale) cache is reused as-is.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from aix.config import Config
from aix.errors import MissingGitInstallation
from aix.git import GitClient
from aix.utils import copy_tree, ensure_dir, recreate_dir, remove_except

logger = logging.getLogger(__name__)


class TemplateStore:
    """Owns the refresh protocol for the on-disk templates cache.

    Concurrent syncs against the same cache are not guarded; two processes
    running at once can corrupt ``templates_dir`` and ``temp_dir``.
    """

    def __init__(self, config: Config, git: GitClient | None = None) -> None:
        self.config = config
        self.git = git or GitClient()

    @property
    def templates_dir(self) -> Path:
        return self.config.templates_dir

    def path(self, *parts: str) -> Path:
        """Return a path inside the templates cache."""
        return self.templates_dir.joinpath(*parts)

    async def sync(self) -> Path:
        """Repopulate the templates cache from the remote repository.

        Returns:
            The templates cache directory.

        Raises:
            MissingGitInstallation: If git is not available on ``PATH``.
            NotADirectory: If the templates cache path exists as a file.
            GitCommandError: If a git command fails.
        """
        if not self.git.is_installed():
            raise MissingGitInstallation()

        repository = self.config.repository
        temp_dir = self.config.temp_dir

        ensure_dir(self.config.local_data_dir)
        # A previous clone left in scratch space would make `git clone .` fail.
        await recreate_dir(temp_dir)

        logger.debug("Cloning %s (branch %s) into %s", repository.url, repository.branch, temp_dir)
        await self.git.clone_sparse(temp_dir, repository.url, repository.branch)

        logger.debug("Initialising sparse checkout")
        await self.git.sparse_checkout_init(temp_dir)

        logger.debug("Restricting sparse checkout to %s", repository.subdirectory)
        await self.git.sparse_checkout_set_path(temp_dir, repository.subdirectory)

        logger.debug("Recreating templates directory at %s", self.templates_dir)
        await recreate_dir(self.templates_dir)

        logger.debug("Removing checkout entries outside %s", repository.subdirectory)
        top_level = PurePosixPath(repository.subdirectory).parts[0]
        await remove_except(temp_dir, {top_level})

        logger.debug("Copying fresh templates to %s", self.templates_dir)
        await copy_tree(temp_dir / repository.subdirectory, self.templates_dir)

        return self.templates_dir
