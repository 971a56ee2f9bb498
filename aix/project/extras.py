"""Layering of optional extras onto a project tree.

Each extra lives in its own subtree of the templates cache:

- ``extras/docker/`` is copied as-is into the project root;
- ``extras/ci/<provider>/.github`` is copied to ``<project root>/.github``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from aix.project.models import CIProvider, Extra, ExtraKind, Project
from aix.store import TemplateStore
from aix.utils import copy_tree

logger = logging.getLogger(__name__)

EXTRAS_DIR = "extras"


async def setup_docker(store: TemplateStore, project: Project) -> Path:
    """Copy the Docker extra into the project root.

    Returns:
        The project root.
    """
    template_dir = store.path(EXTRAS_DIR, "docker")
    logger.debug("Adding Docker setup from %s", template_dir)
    return await copy_tree(template_dir, project.source_root)


async def setup_ci(store: TemplateStore, project: Project, provider: CIProvider) -> Path:
    """Copy the workflow files for *provider* into the project.

    Returns:
        The directory the workflow files were copied to.
    """
    provider_dir = store.path(EXTRAS_DIR, "ci", provider.value)
    logger.debug("Adding %s CI setup from %s", provider.value, provider_dir)

    if provider is CIProvider.GITHUB:
        return await copy_tree(provider_dir / ".github", project.source_root / ".github")
    raise ValueError(f"No CI layout defined for provider {provider.value!r}")


async def apply_extra(store: TemplateStore, project: Project, extra: Extra) -> Path:
    """Dispatch *extra* to its setup function."""
    if extra.kind is ExtraKind.DOCKER:
        return await setup_docker(store, project)
    assert extra.provider is not None  # guaranteed by Extra validation
    return await setup_ci(store, project, extra.provider)
