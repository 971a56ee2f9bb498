"""aix project scaffolding.

Builds a project directory from the cached templates and layers optional
extras on top of it.

Key classes:
    ProjectBuilder - Fluent builder; ``build()`` writes the template files
    Project        - The built project; ``compile()`` substitutes variables
    ProjectKind    - Standalone or workspace layout
    Extra          - Docker or CI add-on
"""

from .builder import ProjectBuilder
from .extras import setup_ci, setup_docker
from .models import CIProvider, Extra, ExtraKind, Project, ProjectKind, validate_project_name

__all__ = [
    "CIProvider",
    "Extra",
    "ExtraKind",
    "Project",
    "ProjectBuilder",
    "ProjectKind",
    "setup_ci",
    "setup_docker",
    "validate_project_name",
]
