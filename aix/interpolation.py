"""Placeholder interpolation for scaffolded project trees.

Template files mark substitution points with ``{{ name }}`` where ``name`` is
one or more word characters, optionally padded with whitespace inside the
braces.  Substitution is flat key lookup: there are no expressions, filters,
conditionals or loops.

A placeholder whose name is not in the variable mapping is left exactly as
written, whitespace included.  That lets a tree be interpolated in several
passes with different variable sets, and leaves foreign syntax such as GitHub
Actions' ``${{ matrix.os }}`` alone (the dot is not a word character).
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Collection, Mapping
from pathlib import Path

from aix.utils import walk_files

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*(\w+)\s*\}\}")

# Bytes that are not valid UTF-8 survive a decode/encode round trip unchanged.
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def interpolate(content: str, variables: Mapping[str, str]) -> str:
    """Replace known ``{{ name }}`` placeholders in *content*.

    Examples::

        interpolate("Hello {{ name }}!", {"name": "Alice"}) -> "Hello Alice!"
        interpolate("Hello {{ name }}!", {})                -> "Hello {{ name }}!"
    """

    def _substitute(match: re.Match[str]) -> str:
        value = variables.get(match.group(1))
        if value is None:
            return match.group(0)
        return str(value)

    return PLACEHOLDER_PATTERN.sub(_substitute, content)


class InterpolationEngine:
    """Rewrites placeholders in every file below a directory.

    Args:
        variables: Placeholder name to replacement text.
        exclude: File or directory names to skip during the walk.
    """

    def __init__(
        self,
        variables: Mapping[str, str],
        exclude: Collection[str] = (),
    ) -> None:
        self.variables = dict(variables)
        self.exclude = frozenset(exclude)

    def interpolate(self, content: str) -> str:
        return interpolate(content, self.variables)

    def _replace_file(self, path: Path) -> None:
        content = path.read_bytes().decode(_ENCODING, _ERRORS)
        path.write_bytes(self.interpolate(content).encode(_ENCODING, _ERRORS))

    async def replace_file(self, path: str | Path) -> Path:
        """Interpolate a single file in place.

        The file is always rewritten, whether or not it contained a
        placeholder.  Binary files are not detected.
        """
        file_path = Path(path)
        await asyncio.to_thread(self._replace_file, file_path)
        return file_path

    async def replace_all(self, root: str | Path) -> list[Path]:
        """Interpolate every file below *root*, one file at a time.

        Args:
            root: Directory to process.

        Returns:
            Absolute paths of every visited file, in walk order (depth-first,
            directory-listing order), including files with no placeholders.
        """
        processed: list[Path] = []
        for path in walk_files(root, self.exclude):
            await self.replace_file(path)
            processed.append(path)
        logger.debug("Interpolated %d files under %s", len(processed), root)
        return processed


async def replace_all(
    root: str | Path,
    exclude: Collection[str],
    variables: Mapping[str, str],
) -> list[Path]:
    """Interpolate every file below *root* with *variables*.

    Shorthand for ``InterpolationEngine(variables, exclude).replace_all(root)``.
    """
    return await InterpolationEngine(variables, exclude).replace_all(root)
