"""
sort_rules.py - Sorting Rules Module

Orders file batches by destination path
"""

from typing import List, Callable
from .models_fs import FileItem, SortDirection


def get_sort_key() -> Callable[[FileItem], tuple]:
    """
    Get sort key function

    Paths compare component by component, so "a/b" sorts before "a-b/c".

    Returns:
        Sort key function
    """
    return lambda f: f.destination.parts


def sort_files(files: List[FileItem], direction: SortDirection = SortDirection.ASCENDING) -> List[FileItem]:
    """
    Sort file list by destination

    Args:
        files: File list
        direction: Ascending or descending

    Returns:
        Sorted file list (new list)
    """
    return sorted(files, key=get_sort_key(), reverse=direction == SortDirection.DESCENDING)
