"""
operation_engine.py - Operation Engine

Drives one rename run. The engine owns the EngineState and two default
operation lists that apply to every directory and every file, ahead of the
directory's and file's own operations.

Processing a directory:
1. local_index is reset to 0 (an OffsetLocalIndex from an earlier directory
   does not carry over)
2. default directory operations, then the directory's own, shape the batch
3. each remaining file runs default file operations, then its own; after
   each file both indices advance by one
"""

from typing import List, Sequence

from .models_fs import DirItem, FileItem
from .engine_state import EngineState
from .dir_ops import DirOperation, apply_dir_operation
from .file_ops import FileOperation, apply_file_operations
from .logger_helper import get_logger

logger = get_logger(__name__)


class OperationEngine:
    """Evaluates directory and file operations over batches of files"""

    def __init__(
        self,
        dir_operations: Sequence[DirOperation] = (),
        file_operations: Sequence[FileOperation] = (),
    ):
        """
        Initialize the engine

        Args:
            dir_operations: Directory operations applied to every directory
            file_operations: File operations applied to every file
        """
        self.dir_operations = tuple(dir_operations)
        self.file_operations = tuple(file_operations)
        self.state = EngineState()

    @property
    def global_index(self) -> int:
        return self.state.global_index

    @property
    def local_index(self) -> int:
        return self.state.local_index

    @property
    def variables(self):
        return self.state.variables

    def process_dir(self, dir_item: DirItem) -> List[FileItem]:
        """
        Run a directory's batch through the engine

        Args:
            dir_item: Built directory (contents already discovered)

        Returns:
            Files left after directory operations, destinations computed
        """
        self.state.local_index = 0

        files = list(dir_item.contents)
        dir_item.contents = []

        for op in self.dir_operations + dir_item.dir_operations:
            files = apply_dir_operation(op, self.state, files)

        logger.debug("[OperationEngine] %s: %d files after directory operations", dir_item.path, len(files))

        for f in files:
            self._run_file(f)

        return files

    def process_file(self, file_item: FileItem) -> FileItem:
        """Run a single file outside of any directory batch"""
        self.state.local_index = 0
        self._run_file(file_item)
        return file_item

    def _run_file(self, file_item: FileItem) -> None:
        self.state.current_file = file_item
        try:
            apply_file_operations(self.file_operations + file_item.operations, self.state)
        finally:
            self.state.current_file = None

        self.state.global_index += 1
        self.state.local_index += 1
