"""Project builder.

Turns a ``(name, kind, source root, extras)`` request into a populated project
directory by copying template subtrees out of the local cache.  The cache is
synced from the remote repository the first time a template is missing.

Quick usage::

    project = await (
        ProjectBuilder(config)
        .name("demo")
        .kind(ProjectKind.STANDALONE)
        .source_root("/tmp/demo")
        .setup_docker(True)
        .setup_ci(True)
        .build()
    )
    files = await project.compile()
"""

from __future__ import annotations

import logging
from pathlib import Path

from aix.config import Config
from aix.project.extras import apply_extra
from aix.project.models import (
    CIProvider,
    Extra,
    ExtraKind,
    Project,
    ProjectKind,
    validate_project_name,
)
from aix.store import TemplateStore
from aix.utils import copy_tree

logger = logging.getLogger(__name__)


class ProjectBuilder:
    """Fluent configuration for a new project.

    The setters only record choices and return the builder; ``build`` is the
    single step that touches the filesystem.  Each extra is held at most once:
    enabling a present extra changes nothing and disabling removes it.
    """

    def __init__(self, config: Config, store: TemplateStore | None = None) -> None:
        self.config = config
        self.store = store or TemplateStore(config)
        self._name = ""
        self._kind = ProjectKind.STANDALONE
        self._source_root: Path | None = None
        self._extras: dict[ExtraKind, Extra] = {}

    # -- Setters -----------------------------------------------------------

    def name(self, name: str) -> "ProjectBuilder":
        self._name = name
        return self

    def kind(self, kind: ProjectKind | str) -> "ProjectBuilder":
        self._kind = kind if isinstance(kind, ProjectKind) else ProjectKind.parse(kind)
        return self

    def source_root(self, path: str | Path) -> "ProjectBuilder":
        self._source_root = Path(path)
        return self

    def setup_ci(
        self,
        enabled: bool,
        provider: CIProvider = CIProvider.GITHUB,
    ) -> "ProjectBuilder":
        if enabled:
            self._extras.setdefault(ExtraKind.CI, Extra.ci(provider))
        else:
            self._extras.pop(ExtraKind.CI, None)
        return self

    def setup_docker(self, enabled: bool) -> "ProjectBuilder":
        if enabled:
            self._extras.setdefault(ExtraKind.DOCKER, Extra.docker())
        else:
            self._extras.pop(ExtraKind.DOCKER, None)
        return self

    @property
    def extras(self) -> tuple[Extra, ...]:
        return tuple(self._extras.values())

    # -- Build -------------------------------------------------------------

    def template_dir(self, kind: ProjectKind) -> Path:
        """Cache directory holding the template for *kind*."""
        return self.store.path(kind.value)

    async def build(self) -> Project:
        """Write the template files for the configured project to disk.

        Placeholders are left as-is; call ``Project.compile`` to substitute
        them.  A failure part-way leaves already-copied files in place.

        Returns:
            The built ``Project``.

        Raises:
            InvalidProjectName: If the name is missing or not a single path
                component.
            ValueError: If no source root was set.
        """
        validate_project_name(self._name)
        if self._source_root is None:
            raise ValueError("ProjectBuilder requires a source root")

        project = Project(
            name=self._name,
            kind=self._kind,
            source_root=self._source_root.absolute(),
            extras=self.extras,
            toolchain_version=self.config.toolchain_version,
        )

        template_dir = self.template_dir(project.kind)
        if not template_dir.exists():
            logger.debug("Template %s not cached; syncing store", template_dir)
            await self.store.sync()

        await copy_tree(template_dir, project.source_root)
        logger.debug("Copied %s to %s", template_dir, project.source_root)

        if project.kind is ProjectKind.WORKSPACE:
            # The initial workspace member is always seeded from the standalone template.
            member_root = project.source_root / project.name
            await copy_tree(self.template_dir(ProjectKind.STANDALONE), member_root)
            logger.debug("Seeded workspace member at %s", member_root)

        for extra in project.extras:
            await apply_extra(self.store, project, extra)

        return project
