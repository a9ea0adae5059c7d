"""
script.py - Rename Scripts

A Script commits several rename trees in order and concatenates their
results. Each tree has its own engine, so indices and variables do not
carry over from one tree to the next.
"""

from typing import List, Iterable, Optional, Callable

from .models_fs import RenameResult
from .rename_tree import RenameTree


class Script:
    def __init__(self, trees: Optional[Iterable[RenameTree]] = None):
        self.trees: List[RenameTree] = list(trees or [])

    def with_tree(self, tree: RenameTree) -> "Script":
        self.push(tree)
        return self

    def push(self, tree: RenameTree) -> None:
        self.trees.append(tree)

    def run(self, progress_callback: Optional[Callable[[int, int, str], None]] = None) -> List[RenameResult]:
        """Commit every tree; stops at the first tree that fails"""
        output: List[RenameResult] = []
        for tree in self.trees:
            output.extend(tree.run(progress_callback))
        return output

    def dry_run(self, progress_callback: Optional[Callable[[int, int, str], None]] = None) -> List[RenameResult]:
        output: List[RenameResult] = []
        for tree in self.trees:
            output.extend(tree.dry_run(progress_callback))
        return output
