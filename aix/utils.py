"""Shared utility functions for aix.

Provides the filesystem primitives the template store and project builder are
built from (directory recreation, tree copy, selective removal, tree walking),
plus Rich-based console output and logging setup.  The async helpers push the
blocking work onto a worker thread with ``asyncio.to_thread`` so they can be
awaited from the scaffolding pipeline.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
from collections.abc import Collection, Iterator
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from aix.errors import NotADirectory

console = Console()
err_console = Console(stderr=True)

# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Args:
        path: Directory path.

    Returns:
        The ``Path`` object for the directory.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def _recreate_dir(path: Path) -> None:
    if path.exists():
        if not path.is_dir():
            raise NotADirectory(path)
        shutil.rmtree(path)
    path.mkdir(parents=True, exist_ok=True)


async def recreate_dir(path: str | Path) -> Path:
    """Make *path* an existing, empty directory.

    **Everything** below *path* is removed if it already exists.

    Args:
        path: Directory to recreate.

    Returns:
        The directory path.

    Raises:
        NotADirectory: If *path* exists but is not a directory.  The existing
            entry is left untouched.
    """
    dir_path = Path(path)
    await asyncio.to_thread(_recreate_dir, dir_path)
    return dir_path


async def copy_tree(src: str | Path, dest: str | Path) -> Path:
    """Recursively copy the contents of *src* into *dest*.

    *dest* is created when missing.  Files already present at the same
    relative path are overwritten; unrelated files in *dest* are kept.

    Args:
        src: Source directory.
        dest: Destination directory.

    Returns:
        The destination path.
    """
    dest_path = Path(dest)
    await asyncio.to_thread(shutil.copytree, Path(src), dest_path, dirs_exist_ok=True)
    return dest_path


def _remove_except(directory: Path, keep: frozenset[str]) -> None:
    for entry in directory.iterdir():
        if entry.name in keep:
            continue
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()


async def remove_except(directory: str | Path, keep: Collection[str] = ()) -> None:
    """Remove every entry directly inside *directory* whose name is not in *keep*.

    Args:
        directory: Directory to prune.  The directory itself is never removed.
        keep: Entry names (not paths) to leave in place.  An empty collection
            empties the directory.
    """
    await asyncio.to_thread(_remove_except, Path(directory), frozenset(keep))


def walk_files(root: str | Path, exclude: Collection[str] = ()) -> Iterator[Path]:
    """Yield every file below *root*, depth-first.

    Entries are visited in the order the directory listing reports them; a
    subdirectory is fully walked before the next sibling.  Any file or
    directory whose name is in *exclude* is skipped, directories together with
    their whole subtree.  Symlinks to directories are skipped, never followed.
    Uses an explicit stack of pending listings rather than recursion.

    Args:
        root: Directory to walk.
        exclude: Entry names to skip.

    Yields:
        Absolute paths of the files found.
    """
    excluded = frozenset(exclude)
    stack: list[Iterator[os.DirEntry[str]]] = [
        iter(_list_dir(Path(root).absolute()))
    ]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue
        if entry.name in excluded:
            continue
        if entry.is_dir(follow_symlinks=False):
            stack.append(iter(_list_dir(Path(entry.path))))
        elif entry.is_file():
            yield Path(entry.path)


def _list_dir(path: Path) -> list[os.DirEntry[str]]:
    with os.scandir(path) as entries:
        return list(entries)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def setup_logging(verbose: bool = False) -> None:
    """Route the ``aix`` loggers through Rich.

    Args:
        verbose: Emit step-by-step DEBUG records when ``True``; only warnings
            and errors otherwise.
    """
    handler = RichHandler(console=err_console, show_time=False, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("aix")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message to stderr."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def print_file_list(files: list[Path], label: str = "ADD") -> None:
    """Print one ``ADD <path>`` line per file."""
    for path in files:
        console.print(f"   [green]{label}[/green] {escape(str(path))}", highlight=False)
