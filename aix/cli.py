"""aix command line.

Usage::

    aix new my-app
    aix new my-app --dir ~/code --setup-docker --ci github
    aix new my-workspace --workspace
    aix sync
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from rich.markup import escape

from aix import __version__
from aix.config import Config
from aix.errors import AixError, NotADirectory
from aix.project import CIProvider, Project, ProjectBuilder, ProjectKind, validate_project_name
from aix.store import TemplateStore
from aix.utils import (
    console,
    ensure_dir,
    print_error,
    print_file_list,
    print_success,
    print_warning,
    setup_logging,
)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def project_kind_from_args(args: argparse.Namespace) -> ProjectKind:
    """``--workspace`` selects a workspace; anything else is standalone."""
    return ProjectKind.WORKSPACE if args.workspace else ProjectKind.STANDALONE


def resolve_source_root(name: str, directory: str | None) -> Path:
    """Return ``<directory or cwd>/<name>``, creating it if needed.

    Raises:
        InvalidProjectName: If *name* is not a single path component.
        NotADirectory: If the path exists and is not a directory.
    """
    validate_project_name(name)
    parent = Path(directory).expanduser() if directory else Path.cwd()
    source_root = (parent / name).absolute()
    if source_root.exists() and not source_root.is_dir():
        raise NotADirectory(source_root)
    return ensure_dir(source_root)


async def run_new(config: Config, args: argparse.Namespace) -> tuple[Project, list[Path]]:
    """Scaffold and compile a new project from parsed ``new`` arguments."""
    provider = CIProvider.parse(args.ci) if args.ci else None
    source_root = resolve_source_root(args.name, args.dir)
    if any(source_root.iterdir()):
        print_warning(f"{source_root} is not empty; files from the template overwrite existing ones")

    project = await (
        ProjectBuilder(config)
        .name(args.name)
        .kind(project_kind_from_args(args))
        .source_root(source_root)
        .setup_ci(provider is not None, provider or CIProvider.GITHUB)
        .setup_docker(args.setup_docker)
        .build()
    )
    files = await project.compile()

    print_success(f"Successfully created new {project.kind} project {project.name}")
    print_file_list(files)
    return project, files


async def run_sync(config: Config, args: argparse.Namespace) -> Path:
    """Refresh the local templates cache."""
    repository = config.repository
    console.print(
        f"[cyan]Syncing templates[/cyan] from [bold]{escape(repository.url)}[/bold] "
        f"([green]{escape(repository.branch)}[/green])..."
    )
    templates_dir = await TemplateStore(config).sync()
    print_success(f"Templates synced to {templates_dir}")
    return templates_dir


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aix",
        description="Scaffold new projects from remote templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  aix new my-app\n"
            "  aix new my-app --dir ~/code --setup-docker --ci github\n"
            "  aix new my-workspace --workspace\n"
            "  aix sync\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print every step, including git commands",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    new = subparsers.add_parser("new", help="Create a new project")
    new.add_argument("name", help="The name of the project")
    new.add_argument(
        "--dir", "-d",
        default=None,
        metavar="DIRECTORY",
        help="Directory in which the project folder is created (default: current directory)",
    )
    kind = new.add_mutually_exclusive_group()
    kind.add_argument(
        "--standalone",
        action="store_true",
        help="Generate a standalone project (default)",
    )
    kind.add_argument(
        "--workspace",
        action="store_true",
        help="Generate a workspace with an initial member project",
    )
    new.add_argument(
        "--ci",
        default=None,
        metavar="PROVIDER",
        help="Set up CI workflows for PROVIDER (supported: github)",
    )
    new.add_argument(
        "--setup-docker",
        action="store_true",
        help="Add a Dockerfile to the project",
    )

    subparsers.add_parser("sync", help="Refresh the local templates cache")
    return parser


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``aix`` and ``python -m aix``."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    commands = {"new": run_new, "sync": run_sync}
    try:
        config = Config.from_env()
        asyncio.run(commands[args.command](config, args))
    except (AixError, OSError) as exc:
        print_error(str(exc))
        sys.exit(1)


if __name__ == "__main__":
    main()
