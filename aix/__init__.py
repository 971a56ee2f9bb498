"""aix -- scaffold new projects from remote, versioned templates."""

__version__ = "0.1.0"
