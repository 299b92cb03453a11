"""Source file discovery and reading.

Directories are walked in sorted order so output is stable across runs.
Hidden directories and each language's dependency/build directories are
skipped, as is anything matched by the root's ``.gitignore`` or
``.contextignore`` (gitignore syntax).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pathspec

logger = logging.getLogger(__name__)

IGNORE_FILES = (".gitignore", ".contextignore")


def load_ignore_spec(root: str | Path) -> pathspec.PathSpec | None:
    """Combined ignore patterns of ``root``, or None when it has no ignore file."""
    root = Path(root)
    lines: list[str] = []
    found = False
    for name in IGNORE_FILES:
        path = root / name
        if not path.is_file():
            continue
        try:
            lines.extend(path.read_text(encoding="utf-8").splitlines())
            found = True
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("cannot read %s: %s", path, e)
    if not found:
        return None
    return pathspec.PathSpec.from_lines("gitwildmatch", lines)


def _is_ignored(spec: pathspec.PathSpec | None, relative: str) -> bool:
    return spec is not None and spec.match_file(relative)


def walk_source_files(
    root: str | Path,
    suffixes: set[str],
    ignore_dirs: set[str] = frozenset(),
    spec: pathspec.PathSpec | None = None,
) -> Iterator[Path]:
    """Yield every file under ``root`` whose suffix is in ``suffixes``."""
    root = Path(root)
    suffixes = {s.lower() for s in suffixes}

    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        kept = []
        for name in sorted(dirnames):
            if name.startswith(".") or name in ignore_dirs:
                continue
            relative = (current / name).relative_to(root).as_posix() + "/"
            if _is_ignored(spec, relative):
                logger.debug("ignored directory %s", relative)
                continue
            kept.append(name)
        # os.walk only descends into what is left in dirnames
        dirnames[:] = kept

        for name in sorted(filenames):
            path = current / name
            if path.suffix.lower() not in suffixes:
                continue
            if _is_ignored(spec, path.relative_to(root).as_posix()):
                logger.debug("ignored file %s", path)
                continue
            yield path


def read_source_file(path: str | Path) -> str:
    """Read a source file as UTF-8. Errors propagate to the caller."""
    return Path(path).read_text(encoding="utf-8")
