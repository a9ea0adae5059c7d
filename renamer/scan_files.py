"""
scan_files.py - File Scanning Module

Turns a directory into an ordered list of paths. Entries of each directory
are visited in name order so that repeated runs see the same batch order.
"""

from pathlib import Path
from typing import List, Optional
import os

from .models_fs import WalkOptions, DirInclusion
from .errors import ReadDirError, CanonicalizeError, MaxDepthReachedError
from .logger_helper import get_logger

logger = get_logger(__name__)


def _sorted_entries(directory: Path) -> List[Path]:
    try:
        with os.scandir(directory) as it:
            names = sorted(entry.name for entry in it)
    except OSError as e:
        raise ReadDirError(f"Cannot read directory {directory}", e) from e
    return [directory / name for name in names]


def canonicalize(path: Path) -> Path:
    """Absolute path with symlinks resolved; the path must exist"""
    try:
        return path.resolve(strict=True)
    except OSError as e:
        raise CanonicalizeError(f"Cannot canonicalize {path}", e) from e


def walk(root: Path, options: Optional[WalkOptions] = None) -> List[Path]:
    """
    Recursively list a directory tree

    Args:
        root: Root directory
        options: Walk policy (directory entries, depth limit, canonicalization)

    Returns:
        Paths in visiting order

    Raises:
        ReadDirError: A directory could not be listed
        CanonicalizeError: A file path could not be resolved
        MaxDepthReachedError: max_depth was reached and fail_on_depth is set
    """
    if options is None:
        options = WalkOptions()

    results = _visit(Path(root), 0, options)
    logger.debug("[Walker] %s: %d entries", root, len(results))
    return results


def _visit(directory: Path, depth: int, options: WalkOptions) -> List[Path]:
    if options.max_depth is not None and depth >= options.max_depth:
        if options.fail_on_depth:
            raise MaxDepthReachedError(directory, options.max_depth)
        if options.dir_inclusions == DirInclusion.SKIP:
            return []
        return [directory]

    results: List[Path] = []
    if options.dir_inclusions == DirInclusion.FIRST:
        results.append(directory)

    for entry in _sorted_entries(directory):
        if entry.is_dir():
            if entry.name in options.ignore_dirs:
                continue
            results.extend(_visit(entry, depth + 1, options))
        elif entry.is_file():
            results.append(canonicalize(entry) if options.canonicalize else entry)

    if options.dir_inclusions == DirInclusion.LAST:
        results.append(directory)

    return results


def list_directory(directory: Path, canonicalize_paths: bool = True) -> List[Path]:
    """
    List the regular files of a single directory (non-recursive)

    Args:
        directory: Target directory
        canonicalize_paths: Resolve each file path

    Returns:
        File paths in name order
    """
    directory = Path(directory)
    files = [entry for entry in _sorted_entries(directory) if entry.is_file()]
    if canonicalize_paths:
        files = [canonicalize(f) for f in files]
    return files
