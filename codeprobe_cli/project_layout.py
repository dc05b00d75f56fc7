"""Project root discovery and deterministic source tree walks.

The project root is always derived from the file being analysed and passed
explicitly to every resolver call.  Nothing here depends on the process
working directory and nothing is cached: each call walks the disk again.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Set

from . import config

logger = logging.getLogger(__name__)

BUILD_DESCRIPTORS = ("pom.xml", "build.gradle", "build.gradle.kts")
SOURCE_DIR = "src"
MODULE_SOURCE_ROOT = Path("src", "main", "java")

PACKAGE_RE = re.compile(r"package\s+([^;]+);")


def ignored_dir_names() -> Set[str]:
    return set(config.IGNORE_DIRS)


def is_ignored_dir(name: str, ignore: Optional[Set[str]] = None) -> bool:
    names = ignore if ignore is not None else ignored_dir_names()
    return name in names or name.startswith(".")


def _ancestors(file_path: Path) -> Iterator[Path]:
    """Directories from the file's parent up to (not including) the filesystem root."""
    current = file_path.parent
    while current != Path(current.anchor):
        yield current
        current = current.parent


def has_build_descriptor(directory: Path) -> bool:
    return any((directory / name).is_file() for name in BUILD_DESCRIPTORS)


def has_module_source_roots(directory: Path, minimum: int = 2) -> bool:
    """True when at least *minimum* child directories own ``src/main/java``."""
    count = 0
    try:
        children = sorted(directory.iterdir())
    except OSError:
        return False
    for child in children:
        if child.is_dir() and (child / MODULE_SOURCE_ROOT).is_dir():
            count += 1
            if count >= minimum:
                return True
    return False


def is_multi_module_root(directory: Path) -> bool:
    return has_build_descriptor(directory) and has_module_source_roots(directory)


def read_package_name(content: str) -> Optional[str]:
    match = PACKAGE_RE.search(content)
    return match.group(1).strip() if match else None


def package_source_root(file_path: Path, package_name: Optional[str]) -> Optional[Path]:
    """Directory holding the top package segment, if the layout matches the package."""
    if not package_name:
        return None
    parts = package_name.split(".")
    directory = file_path.parent
    if len(directory.parts) <= len(parts) or list(directory.parts[-len(parts):]) != parts:
        return None
    root = directory
    for _ in parts:
        root = root.parent
    return root


def find_project_root(file_path: Path, package_name: Optional[str] = None) -> Optional[Path]:
    """Nearest multi-module root, else nearest ``src`` owner, else the package root."""
    file_path = Path(file_path).absolute()
    ancestors = list(_ancestors(file_path))

    for directory in ancestors:
        if is_multi_module_root(directory):
            logger.debug("Multi-module root for %s: %s", file_path, directory)
            return directory

    for directory in ancestors:
        if (directory / SOURCE_DIR).is_dir():
            logger.debug("Single-module root for %s: %s", file_path, directory)
            return directory

    root = package_source_root(file_path, package_name)
    if root is not None:
        logger.debug("Package-derived root for %s: %s", file_path, root)
    return root


def search_root_for(file_path: Path, package_name: Optional[str] = None) -> Path:
    """Root for project-wide searches; the file's own directory when no root exists."""
    root = find_project_root(file_path, package_name)
    return root if root is not None else Path(file_path).absolute().parent


def walk_files(root: Path, suffix: str = ".java", ignore: Optional[Set[str]] = None) -> Iterator[Path]:
    """Yield files under *root* in lexicographic order, pruning ignored directories."""
    names = ignore if ignore is not None else ignored_dir_names()
    for current, dirnames, filenames in os.walk(root, onerror=_log_walk_error):
        dirnames[:] = sorted(d for d in dirnames if not is_ignored_dir(d, names))
        for filename in sorted(filenames):
            if filename.endswith(suffix):
                yield Path(current) / filename


def find_named_files(root: Path, file_names: Iterable[str]) -> Iterator[Path]:
    wanted = set(file_names)
    for path in walk_files(root):
        if path.name in wanted:
            yield path


def list_modules(root: Path) -> List[str]:
    """Child directories of *root* that carry their own ``src`` directory."""
    try:
        return sorted(
            child.name for child in root.iterdir()
            if child.is_dir() and (child / SOURCE_DIR).is_dir()
        )
    except OSError:
        return []


def _log_walk_error(exc: OSError) -> None:
    logger.debug("Skipping unreadable directory: %s", exc)
