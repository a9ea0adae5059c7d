"""
safety_checks.py - Safety Check Module

Warnings about a computed batch, shown with previews before committing.
They never stop a run.
"""

from collections import defaultdict
from pathlib import Path
from typing import Dict, List

from .models_fs import RenameResult
from .text_match import is_valid_filename


def check_results(results: List[RenameResult]) -> List[str]:
    """
    Check a computed batch of renames

    Args:
        results: Results of a dry run

    Returns:
        Warning messages (empty when nothing looks wrong)
    """
    warnings: List[str] = []
    changed = [r for r in results if not r.is_same]
    sources = {r.source for r in results}

    claimed: Dict[Path, List[Path]] = defaultdict(list)
    for r in results:
        claimed[r.destination].append(r.source)
    for dst, srcs in claimed.items():
        if len(srcs) > 1:
            warnings.append(f"Multiple files have the same destination: {dst} <- {', '.join(str(s) for s in srcs)}")

    for r in changed:
        valid, error = is_valid_filename(r.destination.name)
        if not valid:
            warnings.append(f"{r.destination}: {error}")

        if not r.destination.parent.is_dir():
            warnings.append(f"Destination folder does not exist: {r.destination.parent}")
        elif r.destination.exists() and r.destination not in sources and not r.is_case_only_change:
            warnings.append(f"Destination already exists and would be replaced: {r.destination}")

    return warnings
