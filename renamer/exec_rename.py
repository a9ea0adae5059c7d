"""
exec_rename.py - Rename Execution Module

Responsibilities:
- The rename primitive (real or simulated)
- Committing a processed batch: duplicate-source detection, then one rename
  per file, stopping at the first failure
"""

from pathlib import Path
from typing import List, Optional, Callable, Iterable
import os

from .models_fs import FileItem, RenameResult
from .errors import DuplicateFileError, RenameIOError
from .logger_helper import get_logger

logger = get_logger(__name__)


def rename_file(source: Path, destination: Path) -> RenameResult:
    """Rename on disk; an unchanged path is reported without touching the disk"""
    if source != destination:
        try:
            os.rename(source, destination)
        except OSError as e:
            raise RenameIOError(source, destination, e) from e
    return RenameResult(source=source, destination=destination)


def dry_rename_file(source: Path, destination: Path) -> RenameResult:
    """Simulated rename: no I/O, echoes the pair"""
    return RenameResult(source=source, destination=destination)


def check_duplicate_sources(files: Iterable[FileItem]) -> None:
    """Raise DuplicateFileError if two records claim the same source"""
    seen = set()
    for f in files:
        if f.source in seen:
            raise DuplicateFileError(f.source)
        seen.add(f.source)


def execute_rename(
    files: List[FileItem],
    dry_run: bool = False,
    progress_callback: Optional[Callable[[int, int, str], None]] = None,
) -> List[RenameResult]:
    """
    Commit the computed destinations of a batch

    Args:
        files: Processed files
        dry_run: Whether to preview only
        progress_callback: Progress callback (current, total, message)

    Returns:
        One result per file, in batch order

    Raises:
        DuplicateFileError: Before any rename, if a source appears twice
        RenameIOError: On the first failing rename; earlier renames stay done
    """
    check_duplicate_sources(files)

    rename = dry_rename_file if dry_run else rename_file
    total = len(files)
    results: List[RenameResult] = []

    for i, f in enumerate(files):
        if progress_callback:
            tag = "[Preview]" if dry_run else "[Rename]"
            progress_callback(i + 1, total, f"{tag} {f.source.name} -> {f.destination.name}")
        results.append(rename(f.source, f.destination))

    changed = sum(1 for r in results if not r.is_same)
    logger.info("[Exec] %s: %d files, %d renamed", "dry run" if dry_run else "run", total, changed)
    return results
