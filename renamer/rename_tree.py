"""
rename_tree.py - Tree Builder and Execution Driver

Builder collects directories, standalone files and engine-wide default
operations. build_tree() discovers the files, runs them through one
OperationEngine and returns a RenameTree whose run()/dry_run() commit the
computed destinations. A tree can be committed once.
"""

import dataclasses
from typing import List, Optional, Callable, Iterable

from .models_fs import DirItem, FileItem, RenameResult, DirInclusion
from .errors import NotDirectoryError, NotFileError, RenameToolError
from .operation_engine import OperationEngine
from .scan_files import walk, list_directory
from .exec_rename import execute_rename
from .logger_helper import get_logger

logger = get_logger(__name__)


def build_dir(dir_item: DirItem) -> DirItem:
    """
    Discover the files of a directory

    Recursive directories are walked with their WalkOptions, reporting files
    only. Every discovered file carries the directory's file operations.
    """
    if not dir_item.path.is_dir():
        raise NotDirectoryError(dir_item.path)

    if dir_item.recursive:
        options = dataclasses.replace(dir_item.walk_options, dir_inclusions=DirInclusion.SKIP)
        paths = walk(dir_item.path, options)
    else:
        paths = list_directory(dir_item.path, dir_item.walk_options.canonicalize)

    contents = []
    for p in paths:
        f = FileItem(source=p, operations=dir_item.file_operations)
        validate_file(f)
        contents.append(f)

    dir_item.contents = contents
    dir_item.built = True
    return dir_item


def validate_file(file_item: FileItem) -> None:
    if not file_item.source.is_file():
        raise NotFileError(file_item.source)


class RenameTree:
    """Files with computed destinations, ready to be committed"""

    def __init__(self, files: List[FileItem], engine: OperationEngine):
        self.files = files
        self.engine = engine
        self._consumed = False

    def run(self, progress_callback: Optional[Callable[[int, int, str], None]] = None) -> List[RenameResult]:
        """Rename the files on disk"""
        return self._commit(False, progress_callback)

    def dry_run(self, progress_callback: Optional[Callable[[int, int, str], None]] = None) -> List[RenameResult]:
        """Report the renames without touching the filesystem"""
        return self._commit(True, progress_callback)

    def _commit(self, dry_run: bool, progress_callback) -> List[RenameResult]:
        if self._consumed:
            raise RenameToolError("Rename tree has already been committed")
        self._consumed = True

        files, self.files = self.files, []
        return execute_rename(files, dry_run=dry_run, progress_callback=progress_callback)


class Builder:
    """Collects the inputs of a rename tree"""

    def __init__(self):
        self.directories: List[DirItem] = []
        self.files: List[FileItem] = []
        self.dir_operations: list = []
        self.file_operations: list = []

    def with_dir_operation(self, op) -> "Builder":
        self.dir_operations.append(op)
        return self

    def with_dir_operations(self, ops: Iterable) -> "Builder":
        self.dir_operations.extend(ops)
        return self

    def with_file_operation(self, op) -> "Builder":
        self.file_operations.append(op)
        return self

    def with_file_operations(self, ops: Iterable) -> "Builder":
        self.file_operations.extend(ops)
        return self

    def with_directory(self, directory: DirItem) -> "Builder":
        self.directories.append(directory)
        return self

    def with_directories(self, directories: Iterable[DirItem]) -> "Builder":
        self.directories.extend(directories)
        return self

    def with_file(self, file_item: FileItem) -> "Builder":
        self.files.append(file_item)
        return self

    def with_files(self, files: Iterable[FileItem]) -> "Builder":
        self.files.extend(files)
        return self

    def build_tree(self) -> RenameTree:
        """
        Discover files and compute every destination

        Directories are processed in the order they were added, then the
        standalone files, one at a time.

        Raises:
            RenameToolError: First structural, filesystem or evaluation error
        """
        engine = OperationEngine(self.dir_operations, self.file_operations)
        files: List[FileItem] = []

        for directory in self.directories:
            build_dir(directory)
            files.extend(engine.process_dir(directory))

        # Standalone files are processed as fresh copies so the builder can be rebuilt
        for f in self.files:
            validate_file(f)
            files.append(engine.process_file(dataclasses.replace(f, destination=None)))

        logger.info("[RenameTree] Built %d directories, %d files", len(self.directories), len(files))
        return RenameTree(files, engine)

