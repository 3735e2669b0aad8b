"""
Path mapping between notebooks and their hidden script counterparts.

A notebook ``dir/name.ipynb`` is paired with the script ``dir/.nb/name.py``.
``discover`` walks a tree and yields one Directive per file that needs
converting in the requested direction.
"""

import fnmatch
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Sequence, Set, Tuple, Union

from .errors import DiscoveryError

logger = logging.getLogger(__name__)

IPYNB_ENDING = ".ipynb"
PY_ENDING = ".py"
DEFAULT_HIDDEN_DIR = ".nb"


class Direction(str, Enum):
    FORWARD = "to_script"
    REVERSE = "to_notebook"

    @property
    def source_extension(self) -> str:
        return IPYNB_ENDING if self is Direction.FORWARD else PY_ENDING

    @property
    def target_extension(self) -> str:
        return PY_ENDING if self is Direction.FORWARD else IPYNB_ENDING

    @property
    def target_format(self) -> str:
        """Format token handed to the converter (``--to=<format>``)."""
        return self.target_extension.lstrip(".")


@dataclass(frozen=True)
class Directive:
    """One file to convert: where it is, where it goes, and which way."""
    source_path: Path
    destination_path: Path
    direction: Direction

    @property
    def target_format(self) -> str:
        return self.direction.target_format

    def __str__(self) -> str:
        return f"{self.source_path} -> {self.destination_path}"


def matches(path: Union[str, Path], direction: Direction, hidden_dir: str = DEFAULT_HIDDEN_DIR) -> bool:
    """Return True if ``path`` has the source shape for ``direction``."""
    path = Path(path)
    if not path.name.endswith(direction.source_extension):
        return False
    if direction is Direction.REVERSE:
        return path.parent.name == hidden_dir
    return True


def destination_for(source: Union[str, Path], direction: Direction,
                    hidden_dir: str = DEFAULT_HIDDEN_DIR) -> Path:
    """
    Compute the destination path paired with ``source``.

    Only the trailing extension is swapped, so ``a.py.py`` maps to
    ``a.py.ipynb`` and an extension token embedded in the stem is left alone.

    Raises:
        ValueError: if ``source`` does not have the shape ``direction`` expects
    """
    source = Path(source)
    if not matches(source, direction, hidden_dir):
        raise ValueError(f"{source} is not a {direction.value} source")

    stem = source.name[: -len(direction.source_extension)]
    new_name = stem + direction.target_extension

    if direction is Direction.FORWARD:
        return source.parent / hidden_dir / new_name
    return source.parent.parent / new_name


def discover(direction: Direction, root: Union[str, Path] = ".",
             ignore_patterns: Sequence[str] = (),
             hidden_dir: str = DEFAULT_HIDDEN_DIR) -> List[Directive]:
    """
    Find every source file under ``root`` and pair it with its destination.

    Forward matches ``**/*.ipynb``; reverse matches ``**/<hidden_dir>/*.py``.
    Results follow a lexicographic depth-first walk, so ``bar/baz.ipynb``
    sorts before ``baz.ipynb``.

    Args:
        direction: Which way to convert
        root: Directory to scan; returned paths are ``root`` joined with the
            relative location, so the default ``"."`` yields relative paths
        ignore_patterns: fnmatch patterns; matching file or directory names
            are pruned from the walk
        hidden_dir: Name of the directory holding the script counterparts

    Returns:
        One Directive per matched file

    Raises:
        DiscoveryError: if any part of the tree cannot be read, a symlink
            cycle is found, or a matched file is a dangling symlink
    """
    directives = []
    for path in _walk(Path(root), tuple(ignore_patterns)):
        if not matches(path, direction, hidden_dir):
            continue
        if not path.exists():
            raise DiscoveryError(path, "dangling symbolic link")
        directive = Directive(
            source_path=path,
            destination_path=destination_for(path, direction, hidden_dir),
            direction=direction,
        )
        logger.debug("Discovered %s", directive)
        directives.append(directive)
    return directives


def _is_ignored(name: str, ignore_patterns: Tuple[str, ...]) -> bool:
    return any(fnmatch.fnmatch(name, pattern) for pattern in ignore_patterns)


def _walk(root: Path, ignore_patterns: Tuple[str, ...]) -> Iterator[Path]:
    yield from _walk_dir(root, ignore_patterns, set())


def _walk_dir(directory: Path, ignore_patterns: Tuple[str, ...],
              ancestors: Set[Tuple[int, int]]) -> Iterator[Path]:
    try:
        st = directory.stat()
    except OSError as exc:
        raise DiscoveryError(directory, exc.strerror or str(exc)) from exc

    # (device, inode) of every directory on the current descent path
    key = (st.st_dev, st.st_ino)
    if key in ancestors:
        raise DiscoveryError(directory, "symbolic link cycle")

    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        raise DiscoveryError(directory, exc.strerror or str(exc)) from exc

    ancestors.add(key)
    try:
        for entry in entries:
            if _is_ignored(entry.name, ignore_patterns):
                continue
            path = directory / entry.name
            try:
                is_dir = entry.is_dir()
            except OSError as exc:
                raise DiscoveryError(path, exc.strerror or str(exc)) from exc
            if is_dir:
                yield from _walk_dir(path, ignore_patterns, ancestors)
            else:
                yield path
    finally:
        ancestors.discard(key)
